"""Services — the imperative shell: process-wide registry and expectation driver."""

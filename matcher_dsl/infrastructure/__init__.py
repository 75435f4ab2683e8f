"""Infrastructure — logging setup; never imported by core/."""

"""Interactive console — the read-eval-print loop and its session state."""

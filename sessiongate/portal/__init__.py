"""SessionGate portal: Flet shell rendering the session state."""

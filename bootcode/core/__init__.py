"""Program model and execution engine."""

"""Program text parsing."""

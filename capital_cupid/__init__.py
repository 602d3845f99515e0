"""Capital Cupid: grant matching and swipe-to-shortlist core."""

__version__ = "0.1.0"

"""Domain records and the error hierarchy."""

"""URLaundry: strip tracking parameters from URLs, keep the ones that matter."""

"""Restaurant search — restaurants, their reviews, and the read cache in front of them."""

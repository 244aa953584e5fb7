"""HTTP application and server bootstrap."""

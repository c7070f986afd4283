"""Change notifications and the client-side room session built on them."""

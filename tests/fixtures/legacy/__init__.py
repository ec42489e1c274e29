"""Legacy fixture package whose policies live in blog."""

"""Mock interview coach: chat gateway and interview session client."""

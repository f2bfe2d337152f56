"""HTTP adapters: the only layer that talks to the Billomat API."""

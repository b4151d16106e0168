"""countryws — country lookups over a SOAP-style document exchange."""

__version__ = "0.1.0"

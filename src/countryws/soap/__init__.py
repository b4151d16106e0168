"""SOAP-style protocol adapter.

Parses request envelopes, dispatches them to ``LookupService`` through a
static table, and renders response or fault envelopes. Transport (HTTP,
queues, stdin) is the caller's concern.
"""

from countryws.soap.endpoint import CountryEndpoint
from countryws.soap.messages import Fault, ParsedRequest, Response

__all__ = ["CountryEndpoint", "Fault", "ParsedRequest", "Response"]

"""CountryEndpoint — routes request elements to LookupService use cases.

Each request moves through ``received → validated → dispatched`` and ends
``responded`` or ``faulted``; every transition is logged with the
operation bound into the structlog context. ``validated`` is logged only
once the service has accepted the arguments, so a request it rejects
logs ``received → dispatched → faulted``.

Absence policy per operation:

===============================  ========================
request                          when nothing matches
===============================  ========================
getCountryRequest                NOT_FOUND fault
getCountryByCapitalRequest       NOT_FOUND fault
getAllCountriesRequest           empty response
getCountriesByPopulationRequest  empty response
getCurrencyStatsRequest          empty response
updateCountryRequest             NOT_FOUND fault
deleteCountryRequest             ``deleted`` is ``false``
===============================  ========================
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import structlog

from countryws.config.models import DEFAULT_NAMESPACE
from countryws.domain.errors import CountryError, ErrorCode, MalformedRequestError
from countryws.soap.envelope import parse_envelope, render_fault, render_response
from countryws.soap.mapping import (
    country_from_wire,
    country_to_wire,
    currency_stats_to_wire,
    parse_int,
)
from countryws.soap.messages import Fault, ParsedRequest, Response

if TYPE_CHECKING:
    from countryws.services.lookup import LookupService
    from countryws.services.result import ServiceResult

logger = structlog.get_logger(__name__)

Handler = Callable[[ParsedRequest], Response | Fault]


class RequestState(StrEnum):
    RECEIVED = "received"
    VALIDATED = "validated"
    DISPATCHED = "dispatched"
    RESPONDED = "responded"
    FAULTED = "faulted"


def _required(request: ParsedRequest, key: str) -> str:
    """Trimmed value of a required param; absent → MALFORMED_REQUEST."""
    if key not in request.params:
        raise MalformedRequestError(f"{request.operation} requires <{key}>")
    return request.params[key].strip()


def _nested(request: ParsedRequest, element: str) -> dict[str, str]:
    """Children of one nested element, keyed by local name."""
    prefix = f"{element}."
    return {
        key.removeprefix(prefix): value
        for key, value in request.params.items()
        if key.startswith(prefix)
    }


def _optional(request: ParsedRequest, key: str) -> str | None:
    value = request.params.get(key)
    return value.strip() if value is not None else None


def _optional_int(request: ParsedRequest, key: str) -> int | None:
    value = request.params.get(key)
    return parse_int(value, key) if value is not None else None


def _fault_from_result(result: ServiceResult) -> Fault:
    error = result.error
    if error is None:
        return Fault(ErrorCode.INTERNAL, f"{result.op} failed without an error")
    try:
        code = ErrorCode(error.code)
    except ValueError:
        code = ErrorCode.INTERNAL
    return Fault(code, error.message)


class CountryEndpoint:
    """Static dispatch from request element name to handler.

    The table is built once per instance and exposed read-only; handlers
    share the uniform ``(ParsedRequest) -> Response | Fault`` signature.
    """

    def __init__(
        self,
        service: LookupService,
        *,
        namespace: str = DEFAULT_NAMESPACE,
        pretty: bool = False,
    ) -> None:
        self._service = service
        self._namespace = namespace
        self._pretty = pretty
        self._handlers: Mapping[str, Handler] = MappingProxyType(
            {
                "getCountryRequest": self._get_country,
                "getCountryByCapitalRequest": self._get_country_by_capital,
                "getAllCountriesRequest": self._get_all_countries,
                "getCountriesByPopulationRequest": self._get_countries_by_population,
                "getCurrencyStatsRequest": self._get_currency_stats,
                "countCountriesRequest": self._count_countries,
                "addCountryRequest": self._add_country,
                "updateCountryRequest": self._update_country,
                "deleteCountryRequest": self._delete_country,
            }
        )

    @property
    def handlers(self) -> Mapping[str, Handler]:
        return self._handlers

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def handle(self, request: ParsedRequest) -> Response | Fault:
        """Run one request to completion. Never raises."""
        with structlog.contextvars.bound_contextvars(operation=request.operation):
            logger.debug("request.state", state=RequestState.RECEIVED)
            handler = self._handlers.get(request.operation)
            if handler is None:
                outcome: Response | Fault = Fault(
                    ErrorCode.MALFORMED_REQUEST,
                    f"Unsupported operation '{request.operation}'",
                )
            else:
                try:
                    outcome = handler(request)
                except CountryError as exc:
                    outcome = Fault(exc.code, exc.message)
                except Exception:
                    logger.exception("request.unhandled_error")
                    outcome = Fault(ErrorCode.INTERNAL, "Internal server error")

            if isinstance(outcome, Fault):
                logger.info(
                    "request.state",
                    state=RequestState.FAULTED,
                    code=str(outcome.code),
                    message=outcome.message,
                )
            else:
                logger.debug("request.state", state=RequestState.RESPONDED)
            return outcome

    def handle_envelope(self, document: bytes | str) -> bytes:
        """Decode an envelope, handle it, and encode the reply."""
        try:
            request = parse_envelope(document)
        except MalformedRequestError as exc:
            logger.info("request.state", state=RequestState.FAULTED, code=str(exc.code))
            return self.render(Fault(exc.code, exc.message))
        return self.render(self.handle(request))

    def render(self, outcome: Response | Fault) -> bytes:
        if isinstance(outcome, Fault):
            return render_fault(outcome, namespace=self._namespace, pretty=self._pretty)
        return render_response(outcome, namespace=self._namespace, pretty=self._pretty)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _call(
        self,
        method: Callable[..., ServiceResult],
        *args: Any,
        **kwargs: Any,
    ) -> ServiceResult:
        result = method(*args, **kwargs)
        if result.ok:
            logger.debug("request.state", state=RequestState.VALIDATED)
        logger.debug("request.state", state=RequestState.DISPATCHED, ok=result.ok)
        return result

    def _single_country(
        self,
        result: ServiceResult,
        operation: str,
        missing: str,
    ) -> Response | Fault:
        if not result.ok:
            return _fault_from_result(result)
        country = result.data.get("country")
        if country is None:
            return Fault(ErrorCode.NOT_FOUND, missing)
        return Response(operation, {"country": country_to_wire(country)})

    def _country_list(self, result: ServiceResult, operation: str) -> Response | Fault:
        if not result.ok:
            return _fault_from_result(result)
        countries = [country_to_wire(country) for country in result.data["items"]]
        return Response(operation, {"country": countries})

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _get_country(self, request: ParsedRequest) -> Response | Fault:
        name = _required(request, "name")
        result = self._call(self._service.find_by_name, name)
        return self._single_country(result, "getCountryResponse", f"Country '{name}' not found")

    def _get_country_by_capital(self, request: ParsedRequest) -> Response | Fault:
        capital = _required(request, "capital")
        result = self._call(self._service.find_by_capital, capital)
        return self._single_country(
            result,
            "getCountryByCapitalResponse",
            f"No country with capital '{capital}'",
        )

    def _get_all_countries(self, request: ParsedRequest) -> Response | Fault:
        result = self._call(self._service.list_all)
        return self._country_list(result, "getAllCountriesResponse")

    def _get_countries_by_population(self, request: ParsedRequest) -> Response | Fault:
        threshold = parse_int(_required(request, "threshold"), "threshold")
        result = self._call(self._service.find_by_population_above, threshold)
        return self._country_list(result, "getCountriesByPopulationResponse")

    def _get_currency_stats(self, request: ParsedRequest) -> Response | Fault:
        result = self._call(self._service.stats_by_currency)
        if not result.ok:
            return _fault_from_result(result)
        stats = [
            currency_stats_to_wire(code, entry)
            for code, entry in result.data["currencies"].items()
        ]
        return Response("getCurrencyStatsResponse", {"currencyStats": stats})

    def _count_countries(self, request: ParsedRequest) -> Response | Fault:
        result = self._call(self._service.count)
        if not result.ok:
            return _fault_from_result(result)
        return Response("countCountriesResponse", {"count": result.data["count"]})

    def _add_country(self, request: ParsedRequest) -> Response | Fault:
        country = country_from_wire(_nested(request, "country"))
        result = self._call(
            self._service.add_country,
            country.name,
            country.population,
            country.capital,
            country.currency,
        )
        if not result.ok:
            return _fault_from_result(result)
        return Response(
            "addCountryResponse", {"country": country_to_wire(result.data["country"])}
        )

    def _update_country(self, request: ParsedRequest) -> Response | Fault:
        name = _required(request, "name")
        result = self._call(
            self._service.update_country,
            name,
            new_name=_optional(request, "country.name"),
            population=_optional_int(request, "country.population"),
            capital=_optional(request, "country.capital"),
            currency=_optional(request, "country.currency"),
        )
        if not result.ok:
            return _fault_from_result(result)
        return Response(
            "updateCountryResponse", {"country": country_to_wire(result.data["country"])}
        )

    def _delete_country(self, request: ParsedRequest) -> Response | Fault:
        name = _required(request, "name")
        result = self._call(self._service.delete_country, name)
        if not result.ok:
            return _fault_from_result(result)
        return Response(
            "deleteCountryResponse",
            {"name": result.data["name"], "deleted": result.data["deleted"]},
        )

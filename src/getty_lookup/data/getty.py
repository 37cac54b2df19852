"""SPARQL lookups against the Getty vocabularies (ULAN persons, TGN places)."""

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import requests

from getty_lookup.config import (
    CANONICAL_URI_PREFIX,
    DISPLAY_URI_PREFIX,
    GETTY_REPOSITORY,
    GETTY_SPARQL_ENDPOINT,
    GETTY_TGN,
    GETTY_ULAN,
    GETTY_VOCABULARIES,
    NO_DESCRIPTION,
    REQUEST_TIMEOUT,
    RESULT_LIMIT,
)
from getty_lookup.data.fetch import GettyHTTPError, fetch_with_timeout

logger = logging.getLogger(__name__)

# `query` is inserted as-is inside a string literal: callers must keep
# double quotes and backslashes out of it.
_LOOKUP_QUERY = """select ?Subject ?Term ?Parents ?Descr ?ScopeNote ?Type (coalesce(?Type1,?Type2) as ?ExtraType) {{
  ?Subject luc:term "{query}"; a ?typ; skos:inScheme {vocab}:.
  ?typ rdfs:subClassOf gvp:Subject; rdfs:label ?Type.
  filter (?typ != gvp:Subject)
  optional {{?Subject gvp:placeTypePreferred [gvp:prefLabelGVP [xl:literalForm ?Type1]]}}
  optional {{?Subject gvp:agentTypePreferred [gvp:prefLabelGVP [xl:literalForm ?Type2]]}}
  optional {{?Subject gvp:prefLabelGVP [xl:literalForm ?Term]}}
  optional {{?Subject gvp:parentStringAbbrev ?Parents}}
  optional {{?Subject foaf:focus/gvp:biographyPreferred/schema:description ?Descr}}
  optional {{?Subject skos:scopeNote [dct:language gvp_lang:en; rdf:value ?ScopeNote]}}}}
  LIMIT {limit}"""

# Punctuation left unencoded in the query parameter
_URI_COMPONENT_SAFE = "-_.!~*'()"


def get_entity_source_uri(
    query: str,
    vocab: str,
    endpoint: str = GETTY_SPARQL_ENDPOINT,
) -> str:
    """Build the request URI for a full-text lookup in one Getty vocabulary.

    Args:
        query: Search text, embedded unescaped in the SPARQL query.
        vocab: Vocabulary namespace, ``ulan`` or ``tgn``.
        endpoint: Base SPARQL JSON endpoint.

    Returns:
        The endpoint URL with the percent-encoded SPARQL as ``query``.

    Raises:
        ValueError: If `vocab` is not a known Getty vocabulary.
    """
    if vocab not in GETTY_VOCABULARIES:
        raise ValueError(f"Unknown Getty vocabulary: {vocab!r}")

    sparql = _LOOKUP_QUERY.format(query=query, vocab=vocab, limit=RESULT_LIMIT)
    return f"{endpoint}?query={quote(sparql, safe=_URI_COMPONENT_SAFE)}"


def get_person_lookup_uri(query: str, endpoint: str = GETTY_SPARQL_ENDPOINT) -> str:
    """Request URI for a ULAN (person) lookup."""
    return get_entity_source_uri(query, GETTY_ULAN, endpoint)


def get_place_lookup_uri(query: str, endpoint: str = GETTY_SPARQL_ENDPOINT) -> str:
    """Request URI for a TGN (place) lookup."""
    return get_entity_source_uri(query, GETTY_TGN, endpoint)


def rewrite_display_uri(
    uri: str,
    display_prefix: str = DISPLAY_URI_PREFIX,
    canonical_prefix: str = CANONICAL_URI_PREFIX,
) -> str:
    """Swap the canonical Getty prefix of `uri` for a display prefix."""
    if uri.startswith(canonical_prefix):
        return display_prefix + uri[len(canonical_prefix):]
    return uri


def _binding_value(binding: dict, field: str, default: Any = None) -> Any:
    """Return the `value` of a binding field, or `default` when the field is absent."""
    return binding.get(field, {}).get("value", default)


def map_response(
    response: requests.Response,
    query: str,
    vocab: str,
    display_prefix: str = DISPLAY_URI_PREFIX,
) -> list[dict]:
    """Turn a Getty SPARQL JSON response into lookup records.

    Args:
        response: Response from the SPARQL endpoint.
        query: The search text that produced the response.
        vocab: Vocabulary the lookup ran against.
        display_prefix: Prefix used to build ``uri_for_display``.

    Returns:
        One record per binding, in server order.

    Raises:
        GettyHTTPError: If the response status is not 2xx.
    """
    if not 200 <= response.status_code < 300:
        raise GettyHTTPError(response.status_code)

    bindings = response.json()["results"]["bindings"]
    logger.debug("Getty returned %d bindings for %r", len(bindings), query)

    records = []
    for binding in bindings:
        uri = binding["Subject"]["value"]
        records.append({
            "name_type": vocab,
            "id": uri,
            "uri": uri,
            "uri_for_display": rewrite_display_uri(uri, display_prefix),
            "name": _binding_value(binding, "Term"),
            "repository": GETTY_REPOSITORY,
            "original_query_string": query,
            "description": _binding_value(binding, "Descr", NO_DESCRIPTION),
        })

    return records


def find(
    query: str,
    vocab: str,
    endpoint: str = GETTY_SPARQL_ENDPOINT,
    display_prefix: str = DISPLAY_URI_PREFIX,
    timeout: float = REQUEST_TIMEOUT,
    session: requests.Session | None = None,
    config: Mapping[str, Any] | None = None,
) -> list[dict]:
    """Look up `query` in a Getty vocabulary and return at most five records."""
    url = get_entity_source_uri(query, vocab, endpoint)
    response = fetch_with_timeout(url, config, timeout=timeout, session=session)
    return map_response(response, query, vocab, display_prefix)


def find_person(query: str, **options: Any) -> list[dict]:
    """Look up persons in ULAN. See :func:`find` for `options`."""
    return find(query, GETTY_ULAN, **options)


def find_place(query: str, **options: Any) -> list[dict]:
    """Look up places in TGN. See :func:`find` for `options`."""
    return find(query, GETTY_TGN, **options)

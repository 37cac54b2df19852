"""Configuration constants and defaults for Getty Lookup."""

# Getty SPARQL endpoint (JSON results)
GETTY_SPARQL_ENDPOINT = "http://vocab.getty.edu/sparql.json"

# Vocabulary namespaces
GETTY_ULAN = "ulan"  # persons
GETTY_TGN = "tgn"  # places
GETTY_VOCABULARIES = (GETTY_ULAN, GETTY_TGN)

# Record defaults
GETTY_REPOSITORY = "getty"
NO_DESCRIPTION = "No description available"

# Display URI rewrite (canonical prefix -> human-readable page prefix)
CANONICAL_URI_PREFIX = "http://vocab.getty.edu/"
DISPLAY_URI_PREFIX = "https://vocab.getty.edu/page/"

# HTTP settings
USER_AGENT = "GettyLookup/1.0 Python/requests"
REQUEST_TIMEOUT = 10  # seconds

# Query parameters
RESULT_LIMIT = 5

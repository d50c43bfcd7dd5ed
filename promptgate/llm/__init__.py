"""Completion access package.

Architectural role:
    Provides credential configuration, transport clients, response
    normalization and JSON extraction used by `promptgate.core.selector`.

Module split:
    - `provider_config`: environment-driven credentials and request constants.
    - `client`: one transport function per backend.
    - `response_types`: typed provider response shapes.
    - `normalizer`: provider response -> plain text.
    - `json_extractor`: embedded JSON object extraction.
    - `errors`: exception hierarchy.
"""

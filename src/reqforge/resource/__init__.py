"""Resource definitions and their compilation into request specs."""

from .auth import BasicCredentials, Credentials, OAuthToken, coerce_credentials
from .compiler import (
    API_DOMAIN_PARAM,
    ResourceCompiler,
    assemble_url,
    attach_credentials,
    expand_url,
    find_missing_requirements,
    merge_parameters,
    prefix_domain,
    remove_unnecessary_params,
    route_parameters,
)
from .definition import ResourceDefinition, normalize_name, to_symbols
from .methods import ALL_METHODS, BODY_METHODS, DEFAULT_METHOD, HttpMethod, normalize_verb, sends_body
from .request import RequestOptions, RequestSpec

__all__ = [
    # Definition
    "ResourceDefinition", "normalize_name", "to_symbols",
    # Verbs
    "HttpMethod", "ALL_METHODS", "BODY_METHODS", "DEFAULT_METHOD", "normalize_verb", "sends_body",
    # Credentials
    "Credentials", "OAuthToken", "BasicCredentials", "coerce_credentials",
    # Output
    "RequestSpec", "RequestOptions",
    # Compiler
    "ResourceCompiler", "API_DOMAIN_PARAM",
    "merge_parameters", "prefix_domain", "expand_url", "find_missing_requirements",
    "remove_unnecessary_params", "route_parameters", "attach_credentials", "assemble_url",
]

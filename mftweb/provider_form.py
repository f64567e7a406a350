"""Authentication provider records built from submitted form data."""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Mapping


class ProviderType(str, Enum):
    """Kinds of external authentication provider."""

    AUTHENTIK = "authentik"
    OIDC = "oidc"
    SAML = "saml"
    OAUTH2 = "oauth2"


class ProviderError(Exception):
    """Raised when a provider operation cannot be carried out."""


@dataclass
class AuthProvider:
    """An external authentication provider."""

    id: int = 0
    name: str = ""
    type: str = ""
    provider_url: str = ""
    client_id: str = ""
    client_secret: str = ""
    redirect_url: str = ""
    scopes: str = ""
    description: str = ""
    icon_url: str = ""
    enabled: bool = False
    config: str = ""
    attribute_mapping: str = ""


# Which form field feeds which config key, per provider type.
_CONFIG_FIELDS = {
    ProviderType.AUTHENTIK: ("authentik_tenant", "tenant_id"),
    ProviderType.OIDC: ("oidc_discovery_url", "discovery_url"),
    ProviderType.SAML: ("saml_metadata_url", "metadata_url"),
}

_ATTRIBUTE_FIELDS = {
    "username": "attr_username",
    "email": "attr_email",
    "name": "attr_name",
    "groups": "attr_groups",
}

_SUPPORTED_TYPES = frozenset(t.value for t in ProviderType)


def _to_json(data: Mapping[str, Any]) -> str:
    """Compact JSON with sorted keys and HTML-sensitive characters escaped."""
    text = json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return (
        text.replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )


def _type_value(provider_type: Any) -> str:
    return provider_type.value if isinstance(provider_type, ProviderType) else str(provider_type)


def build_provider_config(provider_type: Any, form: Mapping[str, str]) -> str:
    """Return the type-specific config as JSON, or "" when there is nothing to store."""
    type_value = _type_value(provider_type)
    config: dict[str, str] = {}
    for kind, (field, key) in _CONFIG_FIELDS.items():
        if kind.value == type_value:
            value = form.get(field, "")
            if value:
                config[key] = value
    return _to_json(config) if config else ""


def build_attribute_mapping(form: Mapping[str, str]) -> str:
    """Return the non-empty attribute mappings as JSON, or "" when there are none."""
    mapping = {
        attr: form.get(field, "")
        for attr, field in _ATTRIBUTE_FIELDS.items()
        if form.get(field, "")
    }
    return _to_json(mapping) if mapping else ""


def provider_from_form(form: Mapping[str, str]) -> AuthProvider:
    """Create a new provider from submitted form fields."""
    provider_type = form.get("type", "")
    return AuthProvider(
        name=form.get("name", ""),
        type=provider_type,
        provider_url=form.get("provider_url", ""),
        client_id=form.get("client_id", ""),
        client_secret=form.get("client_secret", ""),
        redirect_url=form.get("redirect_url", ""),
        scopes=form.get("scopes", ""),
        description=form.get("description", ""),
        icon_url=form.get("icon_url", ""),
        enabled=form.get("enabled", "") == "on",
        config=build_provider_config(provider_type, form),
        attribute_mapping=build_attribute_mapping(form),
    )


def update_provider_from_form(
    provider: AuthProvider, form: Mapping[str, str]
) -> AuthProvider:
    """Return a copy of the provider with the submitted form fields applied.

    The client secret and type are kept when the form leaves them empty, as are
    the stored config and attribute mapping when the form yields none.
    """
    provider_type = form.get("type", "") or provider.type
    updated = replace(
        provider,
        name=form.get("name", ""),
        provider_url=form.get("provider_url", ""),
        client_id=form.get("client_id", ""),
        icon_url=form.get("icon_url", ""),
        client_secret=form.get("client_secret", "") or provider.client_secret,
        redirect_url=form.get("redirect_url", ""),
        scopes=form.get("scopes", ""),
        description=form.get("description", ""),
        enabled=form.get("enabled", "") == "on",
        type=provider_type,
    )
    config = build_provider_config(provider_type, form)
    if config:
        updated.config = config
    mapping = build_attribute_mapping(form)
    if mapping:
        updated.attribute_mapping = mapping
    return updated


def check_deletable(provider: AuthProvider, identity_count: int) -> None:
    """Raise ProviderError if user identities still refer to the provider."""
    if identity_count > 0:
        raise ProviderError(
            f"Cannot delete provider '{provider.name}' because it has "
            f"{identity_count} associated user identities"
        )


def test_connection(provider: AuthProvider) -> str:
    """Check that the provider's type can be tested and report success."""
    if _type_value(provider.type) not in _SUPPORTED_TYPES:
        raise ProviderError(f"unsupported provider type: {_type_value(provider.type)}")
    return "Connection test successful"
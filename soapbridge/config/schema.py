"""Client configuration using Pydantic.

Read once when a client is built and never mutated afterwards.
"""

import codecs
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_URL = "http://soap.copernica.com/"
DEFAULT_CHARSET = "iso-8859-1"
PARAM_ACCESS_TOKEN = "access_token"


class ClientConfig(BaseSettings):
    """Construction-time settings of a SOAP client."""
    access_token: str = ""  # sent as the access_token parameter unless the caller passes one
    url: str = DEFAULT_URL  # service endpoint; the WSDL lives at url + "?SOAPAPI=WSDL"
    charset: str = DEFAULT_CHARSET  # charset of the caller's strings
    namespace: str | None = None  # target namespace of operation elements (defaults to url)
    timeout: float = 20.0
    diagnostic_policy: Literal["log", "raise", "ignore"] = "log"

    model_config = SettingsConfigDict(
        env_prefix="SOAPBRIDGE_",
        frozen=True,
    )

    @field_validator("charset")
    @classmethod
    def _known_charset(cls, value: str) -> str:
        value = value.strip().lower()
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"unknown charset: {value}") from exc
        return value

    @property
    def target_namespace(self) -> str:
        return self.namespace or self.url

"""Application settings."""

from typing import Annotated, Any, Callable, Self

from pydantic import (
    AfterValidator,
    Field,
    ImportString,
    SecretStr,
    ValidationError,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from isilon_provisioner.exceptions import ConfigurationError


def invalid_empty(v: str) -> str:
    """An empty string is not a valid input.

    Args:
        v (str): input string.

    Returns:
        str: the input string

    """
    if v == "":
        raise ValueError("Empty string is not a valid value")
    return v


NonEmptyStr = Annotated[str, AfterValidator(invalid_empty)]


class Settings(BaseSettings):
    """Settings for the provisioner.

    Built once at startup and passed explicitly to the components needing it.
    """

    ISI_SERVER: Annotated[
        NonEmptyStr,
        Field(
            description="Address of the storage appliance. It is also used as the "
            "identity of this provisioner."
        ),
    ]
    ISI_PATH: Annotated[
        NonEmptyStr,
        Field(
            description="Absolute path on the appliance where volumes are created. "
            "The same path is mounted in the provisioner container."
        ),
    ]
    ISI_ACCESSPATH: Annotated[
        str | None,
        Field(
            default=None,
            description="URI access point. When not set ISI_PATH is used.",
        ),
        AfterValidator(lambda v: v or None),
    ]
    ISI_USER: Annotated[NonEmptyStr, Field(description="Appliance API user")]
    ISI_PASS: Annotated[SecretStr, Field(description="Appliance API password")]
    ISI_GROUP: Annotated[NonEmptyStr, Field(description="Appliance API group")]
    ISI_QUOTA_ENABLE: Annotated[
        bool, Field(default=False, description="Apply quotas to created volumes")
    ]
    ISI_EXPORTS_ENABLE: Annotated[
        bool, Field(default=False, description="Create an NFS export per volume")
    ]
    ISI_PORT: Annotated[
        int, Field(default=8080, gt=0, lt=65536, description="Appliance API port")
    ]
    ISI_INSECURE: Annotated[
        bool,
        Field(default=True, description="Skip TLS verification of the appliance API"),
    ]
    ISI_BACKEND_FACTORY: Annotated[
        ImportString[Callable[..., Any]] | None,
        Field(
            default=None,
            description="Import path ('module:callable') of the factory building the "
            "storage backend client. It receives the settings as only argument.",
        ),
    ]
    PROVISIONER_NAME: Annotated[
        NonEmptyStr,
        Field(
            default="example.com/isilon",
            description="Name of the provisioner written on the produced volumes.",
        ),
    ]

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", frozen=True
    )

    @model_validator(mode="after")
    def check_pass_not_empty(self) -> Self:
        """Password is a SecretStr, the empty string check is done here."""
        if self.ISI_PASS.get_secret_value() == "":
            raise ValueError("ISI_PASS: Empty string is not a valid value")
        return self

    @property
    def access_path(self) -> str:
        """URI access point, defaults to the volumes root path."""
        return self.ISI_ACCESSPATH or self.ISI_PATH

    @property
    def endpoint(self) -> str:
        """Appliance API endpoint."""
        return f"https://{self.ISI_SERVER}:{self.ISI_PORT}"


def load_settings(**overrides: Any) -> Settings:
    """Read settings from the environment.

    Args:
        overrides: values taking precedence over the environment.

    Returns:
        Settings: validated settings.

    Raises:
        ConfigurationError when a required value is missing or invalid.

    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(i) for i in err["loc"]) or "settings" for err in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {fields}") from e

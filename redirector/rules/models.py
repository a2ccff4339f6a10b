from pydantic import BaseModel, ConfigDict, Field, field_validator

from redirector.components.navigation import ConfigSnapshot, RedirectRuleConfig
from redirector.components.services import (
    DEFAULT_REGISTRY,
    ServiceDescriptor,
    ServiceRegistry,
)


class RedirectServiceSetting(BaseModel):
    is_enabled: bool = Field(default=False, alias="isEnabled")
    chosen_instance: str = Field(default="", alias="chosenInstance")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("chosen_instance", mode="before")
    @classmethod
    def none_is_empty(cls, v: object) -> object:
        return "" if v is None else v


class ExtraService(BaseModel):
    identifier: str = Field(min_length=1)
    domains: list[str] = Field(min_length=1)


class UserConfiguration(BaseModel):
    onboarding_complete: bool = Field(default=False, alias="onboardingComplete")
    # None means the user never configured redirects at all
    redirect_settings: dict[str, RedirectServiceSetting] | None = Field(
        default=None, alias="redirectSettings"
    )
    extra_services: list[ExtraService] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("redirect_settings")
    @classmethod
    def lowercase_keys(
        cls, v: dict[str, RedirectServiceSetting] | None
    ) -> dict[str, RedirectServiceSetting] | None:
        if v is None:
            return None
        return {key.strip().lower(): setting for key, setting in v.items()}

    def to_snapshot(self) -> ConfigSnapshot:
        rules = None
        if self.redirect_settings is not None:
            rules = {
                key: RedirectRuleConfig(
                    is_enabled=setting.is_enabled,
                    chosen_instance=setting.chosen_instance,
                )
                for key, setting in self.redirect_settings.items()
            }
        return ConfigSnapshot(
            onboarding_complete=self.onboarding_complete,
            redirect_rules=rules,
        )

    def build_registry(self, base: ServiceRegistry = DEFAULT_REGISTRY) -> ServiceRegistry:
        """Known services followed by any extra services from the file."""
        if not self.extra_services:
            return base
        return base.with_services(
            *(
                ServiceDescriptor.for_domains(extra.identifier, *extra.domains)
                for extra in self.extra_services
            )
        )

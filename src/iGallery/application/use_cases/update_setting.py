"""Change one persisted setting."""

from dataclasses import dataclass
from typing import Any

from .base import EXPECTED_ERRORS, UseCase, UseCaseRequest, UseCaseResponse
from iGallery.settings.manager import SettingsManager


@dataclass(frozen=True)
class UpdateSettingRequest(UseCaseRequest):
    key: str = ""
    value: Any = None


@dataclass(frozen=True)
class UpdateSettingResponse(UseCaseResponse):
    value: Any = None


class UpdateSettingUseCase(UseCase):
    """Validate and persist a dotted settings key.

    Listeners registered on the manager run before this returns, so a new
    ``thumbnails.witness`` applies to the very next lookup.
    """

    def __init__(self, settings: SettingsManager, error_handler=None):
        super().__init__(error_handler)
        self._settings = settings

    def execute(self, request: UpdateSettingRequest) -> UpdateSettingResponse:
        try:
            self._settings.set(request.key, request.value)
        except EXPECTED_ERRORS as exc:
            return self._fail(UpdateSettingResponse, exc, key=request.key)
        return UpdateSettingResponse(value=self._settings.get(request.key))

"""Operaciones de usuario: login, registro, logout y gestión de cuentas."""

from __future__ import annotations

import uuid
from urllib.parse import quote

from pydantic import ValidationError

from core.domain.models import (
    ApiResult,
    HttpMethod,
    Identity,
    RequestDescriptor,
    Success,
)
from core.domain.view_models import ResultArea
from core.domain.views import ADMIN_LANDING_VIEW, USER_LANDING_VIEW, View
from core.logger import get_logger
from core.orchestration.base import OrchestrationModule, unwrap
from core.orchestration.forms import FormInput, parse_int, text

log = get_logger("orchestration.user")


def landing_view(identity: Identity, threshold: int) -> View:
    """Vista inicial tras el login según privilegio (umbral inclusivo)."""

    return ADMIN_LANDING_VIEW if identity.privilege_level >= threshold else USER_LANDING_VIEW


def session_token(payload: dict) -> str:
    """Token de la respuesta de login; si el servidor no lo da, uno local opaco."""

    for key in ("sessionId", "token"):
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value
    return uuid.uuid4().hex


class UserModule(OrchestrationModule):
    async def login(self, form: FormInput) -> ApiResult:
        invalid = self._validate(form, ("userId", "password"))
        if invalid:
            return invalid

        result = await self._ctx.pipeline.execute(
            RequestDescriptor(
                endpoint="/login",
                method=HttpMethod.POST,
                body={"userId": parse_int(text(form, "userId")), "password": text(form, "password")},
            )
        )
        if not isinstance(result, Success):
            return result

        payload = result.payload if isinstance(result.payload, dict) else {}
        try:
            identity = Identity.model_validate(payload.get("user"))
        except ValidationError as exc:
            return self._ctx.pipeline.report(self._unexpected_payload(exc))

        state = self._ctx.state
        state.session.set_session(session_token(payload), identity)
        log.info("Logged in as user %s (privilege %s)", identity.user_id, identity.privilege_level)
        state.notifications.success("Login successful")
        state.router.navigate(landing_view(identity, state.admin_threshold))
        return result

    async def register(self, form: FormInput) -> ApiResult:
        invalid = self._validate(form, ("userId", "username", "password"))
        if invalid:
            return invalid

        result = await self._mutate(
            RequestDescriptor(
                endpoint="/register",
                method=HttpMethod.POST,
                body={
                    "userId": parse_int(text(form, "userId")),
                    "username": text(form, "username"),
                    "password": text(form, "password"),
                },
            ),
            "Registration successful",
        )
        if isinstance(result, Success):
            self._ctx.state.router.navigate(View.LOGIN)
        return result

    def logout(self) -> None:
        """Puramente local: nunca llama a la red."""

        state = self._ctx.state
        state.session.clear_session()
        state.notifications.dismiss()
        state.router.navigate(View.LOGIN)
        log.info("Logged out")

    async def query_user(self, form: FormInput) -> ApiResult:
        invalid = self._validate(form, ("userId",))
        if invalid:
            return invalid

        user_id = quote(text(form, "userId").strip(), safe="")
        return await self._query(
            RequestDescriptor(endpoint=f"/user/{user_id}"),
            ResultArea.USER_INFO,
            lambda payload: Identity.model_validate(unwrap(payload, "user")),
        )

    async def modify_privilege(self, form: FormInput) -> ApiResult:
        invalid = self._validate(form, ("userId", "privilege"))
        if invalid:
            return invalid

        user_id = quote(text(form, "userId").strip(), safe="")
        return await self._mutate(
            RequestDescriptor(
                endpoint=f"/user/{user_id}/privilege",
                method=HttpMethod.PUT,
                body={"privilege": parse_int(text(form, "privilege"))},
            ),
            "Privilege updated",
        )

    async def modify_password(self, form: FormInput) -> ApiResult:
        invalid = self._validate(form, ("userId", "password"))
        if invalid:
            return invalid

        user_id = quote(text(form, "userId").strip(), safe="")
        return await self._mutate(
            RequestDescriptor(
                endpoint=f"/user/{user_id}/password",
                method=HttpMethod.PUT,
                body={"password": text(form, "password")},
            ),
            "Password updated",
        )

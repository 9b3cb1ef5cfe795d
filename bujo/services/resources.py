"""
Generic authenticated CRUD client.

Every journaling entity (diary, bullets, profile sections, motivation boards)
follows the same list/create/retrieve/update/delete conventions, so one
client parameterised by path and record type serves them all. Entity modules
only add their extra endpoints.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import (
    Any,
    Awaitable,
    Generic,
    List,
    Mapping,
    Optional,
    Type,
    TypeVar,
    Union,
)

from pydantic import BaseModel, ValidationError

from bujo.clients.http import AuthenticatedClient
from bujo.core.exceptions import (
    ApiError,
    BujoClientError,
    FormValidationError,
    UnauthenticatedError,
    UnauthorizedError,
)
from bujo.services.routing import LOGIN_PATH, Navigator
from bujo.services.session import SessionService
from bujo.utils.forms import parse_form

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)
ResultT = TypeVar("ResultT")

Identifier = Union[int, str]


@dataclass(slots=True)
class ViewState:
    """Loading and error flags a view renders next to its form."""

    loading: bool = False
    error: Optional[str] = None
    form_error: Optional[str] = None


def unwrap_results(payload: Any) -> List[Any]:
    """Accept both plain lists and paginated ``{"results": [...]}`` envelopes."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("results"), list):
        return payload["results"]
    raise ApiError("Unexpected list payload returned from the API.", detail=payload)


class ResourceClient(Generic[RecordT]):
    """List, retrieve, create, update and delete one entity type."""

    def __init__(
        self,
        http_client: AuthenticatedClient,
        session: SessionService,
        *,
        path: str,
        record_model: Type[RecordT],
        label: str,
        create_model: Optional[Type[BaseModel]] = None,
        update_model: Optional[Type[BaseModel]] = None,
        list_path: Optional[str] = None,
        required_message: Optional[str] = None,
        navigator: Optional[Navigator] = None,
    ) -> None:
        self._http = http_client
        self._session = session
        self.path = path.strip("/") + "/"
        self._record_model = record_model
        self._create_model = create_model
        self._update_model = update_model
        self._list_path = list_path
        self._required_message = required_message
        self._navigator = navigator
        self.label = label
        self.state = ViewState()

    def detail_path(self, identifier: Identifier) -> str:
        return f"{self.path}{identifier}/"

    async def list(self) -> List[RecordT]:
        user_id = self.require_user_id()
        path = (self._list_path or self.path).format(user_id=user_id)
        payload = await self._guard(self._get_json(path))
        return [self._parse(item) for item in unwrap_results(payload)]

    async def get(self, identifier: Identifier) -> RecordT:
        payload = await self._guard(self._get_json(self.detail_path(identifier)))
        return self._parse(payload)

    async def create(self, data: Union[BaseModel, Mapping[str, Any]]) -> RecordT:
        body = self._form_body(self._create_model, data)
        response = await self._mutate("create", self._http.post(self.path, json=body))
        return self._parse(response.json())

    async def update(
        self, identifier: Identifier, data: Union[BaseModel, Mapping[str, Any]]
    ) -> RecordT:
        body = self._form_body(self._update_model, data)
        response = await self._mutate(
            "update", self._http.patch(self.detail_path(identifier), json=body)
        )
        return self._parse(response.json())

    async def delete(self, identifier: Identifier) -> bool:
        await self._mutate("delete", self._http.delete(self.detail_path(identifier)))
        return True

    def require_user_id(self) -> str:
        """Return the known user id, or send the view to login and raise."""
        user_id = self._session.resolve_user_id()
        if not user_id:
            self._redirect_to_login()
            raise UnauthenticatedError()
        return user_id

    async def _get_json(self, path: str, **kwargs: Any) -> Any:
        response = await self._http.get(path, **kwargs)
        return response.json()

    def _form_body(
        self, model: Optional[Type[BaseModel]], data: Union[BaseModel, Mapping[str, Any]]
    ) -> dict:
        self.state.form_error = None
        if model is None:
            if isinstance(data, BaseModel):
                return data.model_dump(mode="json", exclude_unset=True)
            return dict(data)
        try:
            form = parse_form(model, data, message=self._required_message)
        except FormValidationError as exc:
            self.state.form_error = exc.message
            raise
        return form.model_dump(mode="json", exclude_unset=True)

    def _parse(self, payload: Any) -> RecordT:
        try:
            return self._record_model.model_validate(payload)
        except ValidationError as exc:
            raise ApiError(
                f"Malformed {self.label} returned from the API.", detail=payload
            ) from exc

    async def _guard(self, call: Awaitable[ResultT]) -> ResultT:
        try:
            return await call
        except UnauthorizedError:
            self._redirect_to_login()
            raise

    async def _mutate(self, verb: str, call: Awaitable[ResultT]) -> ResultT:
        self.state.loading = True
        self.state.error = None
        try:
            return await self._guard(call)
        except BujoClientError:
            self.state.error = f"Failed to {verb} {self.label}"
            logger.warning("Failed to %s %s", verb, self.label)
            raise
        finally:
            self.state.loading = False

    def _redirect_to_login(self) -> None:
        if self._navigator is not None:
            self._navigator.navigate(LOGIN_PATH)


__all__ = ["Identifier", "ResourceClient", "ViewState", "unwrap_results"]

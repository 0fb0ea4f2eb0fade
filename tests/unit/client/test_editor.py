from __future__ import annotations

from typing import Optional

import pytest

from cookbook.client.editor import (
    CREATED_TOAST,
    DELETE_PROMPT,
    LOGIN_FIRST_TOAST,
    NOT_OWNER_MESSAGE,
    REQUIRED_FIELDS_MESSAGE,
    SESSION_EXPIRED_TOAST,
    UPDATED_TOAST,
    Outcome,
    RecipeEditor,
    RecipeForm,
    parse_form,
)
from cookbook.client.errors import ApiError, NotOwnerError, SessionExpiredError
from cookbook.client.models import Recipe, RecipePayload
from cookbook.client.persistence import LocalPersistenceStore
from cookbook.client.storage.memory import MemoryKeyValueStore


class RecipeWriterStub:
    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error
        self.calls: list[tuple] = []

    async def get_recipe(self, recipe_id: str) -> Recipe:
        return Recipe(
            id=recipe_id,
            title="Soup",
            category="Soups",
            prepMinutes=25,
            ingredients=["water", "salt"],
            instructions=["boil"],
        )

    async def create_recipe(self, payload: RecipePayload, token: str) -> Recipe:
        self.calls.append(("create", payload, token))
        if self.error:
            raise self.error
        return Recipe(id="new", **payload.model_dump())

    async def update_recipe(self, recipe_id: str, payload: RecipePayload, token: str) -> Recipe:
        self.calls.append(("update", recipe_id, payload, token))
        if self.error:
            raise self.error
        return Recipe(id=recipe_id, **payload.model_dump())

    async def delete_recipe(self, recipe_id: str, token: str) -> None:
        self.calls.append(("delete", recipe_id, token))
        if self.error:
            raise self.error


def _token(value: Optional[str]):
    async def get_token() -> Optional[str]:
        return value

    return get_token


VALID_FORM = RecipeForm(
    title=" Soup ",
    category="Soups",
    prep_minutes="20",
    ingredients_text="water\n\n  salt \n",
    instructions_text="boil\n",
)


@pytest.fixture
def persistence() -> LocalPersistenceStore:
    return LocalPersistenceStore(MemoryKeyValueStore())


class TestParseForm:
    def test_trims_and_splits_lines(self) -> None:
        payload = parse_form(VALID_FORM)

        assert payload.title == "Soup"
        assert payload.prepMinutes == 20
        assert payload.ingredients == ["water", "salt"]
        assert payload.instructions == ["boil"]

    @pytest.mark.parametrize("raw", ["", "abc", "-5", None, "nan"])
    def test_bad_minutes_become_zero(self, raw) -> None:
        assert parse_form(RecipeForm(title="a", category="b", prep_minutes=raw)).prepMinutes == 0


class TestSubmit:
    @pytest.mark.asyncio
    async def test_required_fields_checked_before_network(self, persistence) -> None:
        api = RecipeWriterStub()
        editor = RecipeEditor(api, _token("tok"), persistence)

        result = await editor.submit(RecipeForm(title="  ", category="Soups"))

        assert result.outcome is Outcome.ERROR
        assert result.error == REQUIRED_FIELDS_MESSAGE
        assert api.calls == []

    @pytest.mark.asyncio
    async def test_signed_out_redirects_to_login(self, persistence) -> None:
        api = RecipeWriterStub()
        editor = RecipeEditor(api, _token(None), persistence)

        result = await editor.submit(VALID_FORM)

        assert result.outcome is Outcome.LOGIN_REQUIRED
        assert persistence.pop_toast() == LOGIN_FIRST_TOAST
        assert api.calls == []

    @pytest.mark.asyncio
    async def test_create(self, persistence) -> None:
        api = RecipeWriterStub()
        editor = RecipeEditor(api, _token("tok"), persistence)

        result = await editor.submit(VALID_FORM)

        assert result.outcome is Outcome.SAVED
        assert result.recipe.id == "new"
        assert api.calls[0][0] == "create"
        assert api.calls[0][2] == "tok"
        assert persistence.pop_toast() == CREATED_TOAST

    @pytest.mark.asyncio
    async def test_update(self, persistence) -> None:
        api = RecipeWriterStub()
        editor = RecipeEditor(api, _token("tok"), persistence)

        result = await editor.submit(VALID_FORM, recipe_id="r1")

        assert result.outcome is Outcome.SAVED
        assert api.calls[0][:2] == ("update", "r1")
        assert persistence.pop_toast() == UPDATED_TOAST

    @pytest.mark.asyncio
    async def test_expired_session(self, persistence) -> None:
        editor = RecipeEditor(RecipeWriterStub(SessionExpiredError()), _token("tok"), persistence)

        result = await editor.submit(VALID_FORM, recipe_id="r1")

        assert result.outcome is Outcome.LOGIN_REQUIRED
        assert persistence.pop_toast() == SESSION_EXPIRED_TOAST

    @pytest.mark.asyncio
    async def test_not_owner(self, persistence) -> None:
        editor = RecipeEditor(RecipeWriterStub(NotOwnerError()), _token("tok"), persistence)

        result = await editor.submit(VALID_FORM, recipe_id="r1")

        assert result.outcome is Outcome.ERROR
        assert result.error == NOT_OWNER_MESSAGE
        assert persistence.pop_toast() is None

    @pytest.mark.asyncio
    async def test_other_failures_keep_server_message(self, persistence) -> None:
        editor = RecipeEditor(RecipeWriterStub(ApiError(500, "Server error")), _token("tok"), persistence)

        result = await editor.submit(VALID_FORM)

        assert result.outcome is Outcome.ERROR
        assert result.error == "Server error"


class TestLoadForEdit:
    @pytest.mark.asyncio
    async def test_prefills_form(self, persistence) -> None:
        editor = RecipeEditor(RecipeWriterStub(), _token("tok"), persistence)

        form = await editor.load_for_edit("r1")

        assert form.title == "Soup"
        assert form.prep_minutes == 25
        assert form.ingredients_text == "water\nsalt"


class TestDelete:
    @pytest.mark.asyncio
    async def test_declined_confirmation_sends_nothing(self, persistence) -> None:
        api = RecipeWriterStub()
        editor = RecipeEditor(api, _token("tok"), persistence)
        prompts: list[str] = []

        def decline(prompt: str) -> bool:
            prompts.append(prompt)
            return False

        result = await editor.delete("r1", decline)

        assert result.outcome is Outcome.CANCELLED
        assert prompts == [DELETE_PROMPT]
        assert api.calls == []

    @pytest.mark.asyncio
    async def test_confirmed_delete(self, persistence) -> None:
        api = RecipeWriterStub()
        editor = RecipeEditor(api, _token("tok"), persistence)

        result = await editor.delete("r1", lambda prompt: True)

        assert result.outcome is Outcome.DELETED
        assert api.calls == [("delete", "r1", "tok")]

    @pytest.mark.asyncio
    async def test_delete_by_non_owner(self, persistence) -> None:
        editor = RecipeEditor(RecipeWriterStub(NotOwnerError()), _token("tok"), persistence)

        result = await editor.delete("r1", lambda prompt: True)

        assert result.outcome is Outcome.ERROR
        assert result.error == "You can only modify your own recipes"

"""Tests for session role checks and the admin property service."""

from datetime import datetime, timedelta, timezone

import pytest

from property_manager.models.property import PropertyCreateRequest
from property_manager.models.user import UserCredential
from property_manager.services.admin import AdminPropertyService
from property_manager.services.sessions import SessionContext
from property_manager.utils.errors import AlreadyExistsError, AuthError, NotFoundError, PermissionDeniedError
from tests.fixtures.properties import villa_published
from tests.utils.assertions import assert_fully_localized
from tests.utils.factories import create_user_data
from tests.utils.helpers import write_version_file


def session_with(*roles, property_ids=()):
    return SessionContext(
        user_id="u-test",
        username="tester",
        roles=frozenset(roles),
        property_ids=frozenset(property_ids),
    )


@pytest.fixture
def seeded_store(store, storage_config, frozen_clock):
    write_version_file(storage_config, "villa_x", "data.json", villa_published())
    store.create_shell("house_y", {"en": "Arcadia House", "fr": "Maison Arcadia"}, "sale")
    return store


@pytest.mark.unit
def test_session_for_user_folds_roles_and_claims():
    user = UserCredential.model_validate(create_user_data(roles=["Property-Owner"], property_ids=["Villa_X"]))

    session = SessionContext.for_user(user)

    assert session.is_property_owner
    assert not session.is_admin
    assert session.has_property_access("villa_x")
    assert session.can_edit("VILLA_X")
    assert not session.can_edit("house_y")


@pytest.mark.unit
@pytest.mark.parametrize("role", ["property-owner", "property_owner", "propertyowner", "owner"])
def test_owner_role_aliases(role):
    assert session_with(role).is_property_owner


@pytest.mark.unit
def test_property_manager_can_view_but_not_edit():
    session = session_with("property-manager", property_ids=["villa_x"])

    assert session.can_view("villa_x")
    assert not session.can_edit("villa_x")
    assert not session.can_create()


@pytest.mark.unit
def test_expired_session_raises_auth_error():
    session = SessionContext(
        user_id="u1",
        username="agent",
        roles=frozenset({"agent"}),
        expires_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )

    assert session.is_expired(datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=1))
    with pytest.raises(AuthError):
        session.ensure_active()


@pytest.mark.unit
def test_disabled_user_raises_auth_error(store):
    user = UserCredential.model_validate({**create_user_data(roles=["admin"]), "disabled": True})
    service = AdminPropertyService(store, SessionContext.for_user(user))

    with pytest.raises(AuthError):
        service.list_properties()


@pytest.mark.unit
def test_admin_lists_everything_sorted_by_name(seeded_store, admin_session):
    service = AdminPropertyService(seeded_store, admin_session)

    records = service.list_properties(language="fr")

    assert [record.id for record in records] == ["house_y", "villa_x"]
    assert records[0].name.resolve("en") == "Maison Arcadia"
    for record in records:
        assert_fully_localized(record)


@pytest.mark.unit
def test_admin_list_with_all_languages(seeded_store, admin_session):
    records = AdminPropertyService(seeded_store, admin_session).list_properties(include_all_languages=True)

    assert records[1].name.translations["de"] == "Villa X"
    assert records[1].name.translations["el"] == "Βίλα Χ"


@pytest.mark.unit
def test_agent_lists_only_claimed(seeded_store, agent_session):
    records = AdminPropertyService(seeded_store, agent_session).list_properties()

    assert [record.id for record in records] == ["villa_x"]


@pytest.mark.unit
def test_user_without_roles_cannot_list(seeded_store):
    with pytest.raises(PermissionDeniedError):
        AdminPropertyService(seeded_store, session_with()).list_properties()


@pytest.mark.unit
def test_get_property_returns_latest_unlocalized(seeded_store, agent_session):
    seeded_store.update("villa_x", {"summary": {"en": "Draft text", "fr": "Brouillon"}})

    record = AdminPropertyService(seeded_store, agent_session).get_property("villa_x")

    assert record.is_published is False
    assert record.summary.translations == {"en": "Draft text", "fr": "Brouillon"}


@pytest.mark.unit
def test_get_property_denied_and_missing(seeded_store, agent_session, admin_session):
    with pytest.raises(PermissionDeniedError):
        AdminPropertyService(seeded_store, agent_session).get_property("house_y")
    with pytest.raises(NotFoundError):
        AdminPropertyService(seeded_store, admin_session).get_property("nowhere")


@pytest.mark.unit
def test_create_allowed_roles(store, frozen_clock):
    owner = AdminPropertyService(store, session_with("owner"))
    manager = AdminPropertyService(store, session_with("property-manager"))

    assert owner.create({"id": "villa_z", "name": "Villa Z", "status": "rental"}) == "villa_z"
    with pytest.raises(PermissionDeniedError):
        manager.create(PropertyCreateRequest(id="villa_w", name="Villa W", status="rental"))
    assert store.get_latest("villa_w") is None


@pytest.mark.unit
def test_create_duplicate_propagates(seeded_store, admin_session):
    with pytest.raises(AlreadyExistsError):
        AdminPropertyService(seeded_store, admin_session).create({"id": "villa_x", "name": "Dup", "status": "rental"})


@pytest.mark.unit
def test_agent_edits_claimed_property(seeded_store, agent_session, frozen_clock):
    service = AdminPropertyService(seeded_store, agent_session)

    service.update("villa_x", {"summary": "Fresh paint"})
    frozen_clock.tick()
    service.archive("villa_x")
    assert seeded_store.get_latest("villa_x").archived is True

    frozen_clock.tick()
    service.restore("villa_x")
    frozen_clock.tick()
    service.update("villa_x", {"summary": "Mistake"})
    assert service.revert("villa_x") is not None

    version = service.publish("villa_x")
    published = seeded_store.get_published("villa_x")
    assert published.version == version
    assert published.archived is False
    assert published.summary.resolve("en") == "Fresh paint"


@pytest.mark.unit
@pytest.mark.parametrize("action", ["update", "archive", "restore", "publish", "revert"])
def test_agent_cannot_edit_unclaimed_property(seeded_store, agent_session, action):
    service = AdminPropertyService(seeded_store, agent_session)
    args = ("house_y", {"summary": "x"}) if action == "update" else ("house_y",)

    with pytest.raises(PermissionDeniedError):
        getattr(service, action)(*args)


@pytest.mark.unit
def test_update_missing_property_propagates(store, admin_session):
    with pytest.raises(NotFoundError):
        AdminPropertyService(store, admin_session).update("nowhere", {"summary": "x"})

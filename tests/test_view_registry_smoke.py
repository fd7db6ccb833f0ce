import pandas  # noqa: F401  (loaded before streamlit is mocked)
from unittest.mock import patch, MagicMock

from domain.models import OpResult
from services import users as user_svc
from services.persistence import ConcurrentWriteError

# Mock streamlit before importing the app
st_mock = MagicMock()


def _registry():
    with patch.dict("sys.modules", {"streamlit": st_mock}):
        import app
        return app


def test_page_registry_structure():
    registry = _registry().PAGE_REGISTRY
    assert isinstance(registry, dict)
    for key, value in registry.items():
        assert "label" in value
        assert "render_func" in value
        assert "roles" in value
        assert callable(value["render_func"]), f"Render function for '{key}' is not callable."
        assert value["roles"], f"Page '{key}' is visible to nobody."


def test_admin_only_pages():
    registry = _registry().PAGE_REGISTRY
    admin_only = [k for k, v in registry.items() if v["roles"] == ["Admin"]]
    assert sorted(admin_only) == ["settings", "user_management"]


def test_qr_checker_sees_only_verification():
    app = _registry()
    assert list(app.pages_for_role("QR Checker Staff")) == ["verify"]
    assert app.landing_page("QR Checker Staff") == "verify"


def test_staff_pages():
    app = _registry()
    assert list(app.pages_for_role("Staff")) == ["dashboard", "applications", "senior_form", "verify"]
    assert app.landing_page("Staff") == "dashboard"
    assert len(app.pages_for_role("Admin")) == len(app.PAGE_REGISTRY)


class FakeSessionState(dict):
    """Dict with attribute access, like st.session_state."""

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name)

    def __setattr__(self, name, value):
        self[name] = value


def _client_state(app, session_state):
    app.st.session_state = session_state
    return app._load_app_state()


def test_new_client_does_not_inherit_another_login():
    app = _registry()
    staff_client = FakeSessionState()
    _client_state(app, staff_client)
    staff_client.app_state.current_user = user_svc.login('admin', 'password123')

    visitor = _client_state(app, FakeSessionState())
    assert visitor.current_user is None
    assert _client_state(app, staff_client).current_user['username'] == 'admin'


def test_logout_elsewhere_keeps_other_clients_signed_in():
    app = _registry()
    client = FakeSessionState()
    _client_state(app, client)
    client.app_state.current_user = user_svc.login('admin', 'password123')

    user_svc.logout()
    assert _client_state(app, client).current_user['id'] == '1'


def test_deleted_account_is_signed_out():
    app = _registry()
    staff = user_svc.create_user('staff', 'pw', 'Staff').record
    client = FakeSessionState()
    _client_state(app, client)
    client.app_state.current_user = user_svc.login('staff', 'pw')

    user_svc.delete_user(staff['id'])
    assert _client_state(app, client).current_user is None


def test_review_outcome_survives_rerun():
    view_module = _registry().applications
    st_mock.session_state = FakeSessionState()
    st_mock.rerun.reset_mock()

    view_module._run(lambda: OpResult.success({'id': 'a'}, message="Issued control number PLN-2026-12345"),
                     "Approved")
    assert st_mock.session_state[view_module.FLASH_KEY] == "Approved. Issued control number PLN-2026-12345"
    st_mock.rerun.assert_called_once()


def test_review_race_warns_instead_of_crashing():
    view_module = _registry().applications
    st_mock.session_state = FakeSessionState()
    st_mock.rerun.reset_mock()
    st_mock.warning.reset_mock()

    def lost_race():
        raise ConcurrentWriteError("applications.json changed since it was read")

    view_module._run(lost_race, "Approved")
    assert view_module.FLASH_KEY not in st_mock.session_state
    st_mock.warning.assert_called()
    st_mock.rerun.assert_not_called()

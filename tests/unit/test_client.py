from datetime import date

import pytest

import love
import love.adapters.transport as transport_module
from love.client import Client, connect, session
from love.core.config import ClientSettings
from love.core.domain.errors import InvalidURI, LoveError, NotFound, Unauthorized
from love.core.domain.models import PagingOptions, ResourceKind


@pytest.mark.parametrize(
    "method, path",
    [
        ("get_user", "/mysupport/users/12"),
        ("get_discussion", "/mysupport/discussions/12"),
        ("get_category", "/mysupport/categories/12"),
        ("get_queue", "/mysupport/queues/12"),
    ],
)
def test_singleton_getters(make_client, fake_api, method, path):
    fake_api.add(path, {"href": f"https://api.tenderapp.com{path}"})

    result = getattr(make_client(), method)(12)

    assert result == {"href": f"https://api.tenderapp.com{path}"}
    assert fake_api.requests[0].url.path == path


def test_get_accepts_href_from_previous_response(make_client, fake_api):
    href = "https://api.tenderapp.com/mysupport/users/5"
    fake_api.add("/mysupport/users/5", {"name": "Bob"})

    assert make_client().get_user(href) == {"name": "Bob"}


def test_get_rejects_other_account_before_requesting(make_client, fake_api):
    with pytest.raises(InvalidURI):
        make_client().get_user("https://api.tenderapp.com/other/users/5")
    assert fake_api.requests == []


def test_get_surfaces_typed_errors(make_client, fake_api):
    fake_api.add("/mysupport/users/1", {}, status_code=403)
    client = make_client()

    with pytest.raises(Unauthorized):
        client.get_user(1)
    with pytest.raises(NotFound):
        client.get_discussion(1)


@pytest.mark.parametrize(
    "method, path, list_key",
    [
        ("iter_categories", "/mysupport/categories", "categories"),
        ("iter_queues", "/mysupport/queues", "named_queues"),
        ("iter_users", "/mysupport/users", "users"),
        ("iter_discussions", "/mysupport/discussions", "discussions"),
    ],
)
def test_collection_iterators_use_list_keys(make_client, fake_api, make_records, method, path, list_key):
    fake_api.add_collection(path, list_key, make_records(12), per_page=5)

    records = list(getattr(make_client(), method)())

    assert [r["id"] for r in records] == list(range(1, 13))
    assert fake_api.pages_requested() == [1, 2, 3]


def test_paging_example_total_25_end_page_2(make_client, fake_api, make_records, sleeps):
    fake_api.add_collection("/mysupport/discussions", "discussions", make_records(25), per_page=10)

    records = list(make_client().iter_discussions(end_page=2))

    assert len(records) == 20
    assert fake_api.pages_requested() == [1, 2]
    assert sleeps == [0.5, 0.5]


def test_empty_collection_single_request(make_client, fake_api):
    fake_api.add_collection("/mysupport/users", "users", [], per_page=10)

    assert list(make_client().iter_users()) == []
    assert len(fake_api.requests) == 1


def test_since_is_forwarded(make_client, fake_api, make_records):
    fake_api.add_collection("/mysupport/discussions", "discussions", make_records(3))

    list(make_client().iter_discussions(since=date(2024, 5, 1)))

    assert fake_api.requests[0].url.params["since"] == "2024-05-01"


def test_iter_collection_with_options_and_overrides(make_client, fake_api, make_records):
    fake_api.add_collection("/mysupport/users", "users", make_records(30), per_page=10)

    records = list(
        make_client().iter_collection(
            "https://api.tenderapp.com/mysupport/users",
            "users",
            PagingOptions(start_page=2),
            end_page=2,
        )
    )

    assert [r["id"] for r in records] == list(range(11, 21))
    assert fake_api.pages_requested() == [2]


def test_iter_collection_validates_eagerly(make_client, fake_api):
    with pytest.raises(InvalidURI):
        make_client().iter_collection("https://api.tenderapp.com/other/users", "users")
    assert fake_api.requests == []


def test_sleep_between_requests_is_mutable(make_client, fake_api, make_records, sleeps):
    fake_api.add_collection("/mysupport/users", "users", make_records(4), per_page=2)
    client = make_client()
    client.sleep_between_requests = None

    list(client.iter_users())

    assert sleeps == []


def test_non_persistent_client_opens_a_connection_per_request(make_client, fake_api, make_records, mocker):
    fake_api.add_collection("/mysupport/users", "users", make_records(30), per_page=10)
    spy = mocker.spy(transport_module, "build_client")
    client = make_client()

    list(client.iter_users())

    assert client.persistent is False
    assert spy.call_count == 3
    assert not client.connected


def test_persistent_client_spans_requests(make_client, fake_api, make_records, mocker):
    fake_api.add_collection("/mysupport/users", "users", make_records(30), per_page=10)
    spy = mocker.spy(transport_module, "build_client")
    client = make_client(persistent=True)

    list(client.iter_users())

    assert spy.call_count == 1
    assert client.connected
    client.close_connection()
    assert not client.connected


def test_client_context_manager_closes_connection(make_client, fake_api):
    fake_api.add("/mysupport/users/1", {"id": 1})

    with make_client(persistent=True) as client:
        client.get_user(1)
        connection = client.connection
        assert client.connected

    assert connection.is_closed
    assert not client.connected


def test_client_does_not_connect_on_creation(make_client):
    client = make_client(persistent=True)
    assert not client.connected


def test_client_properties(make_client):
    client = make_client()
    assert client.site == "mysupport"
    assert client.api_key == "secret-key"
    assert client.request_headers["X-Tender-Auth"] == "secret-key"


def test_client_requires_api_key(settings):
    with pytest.raises(LoveError):
        Client("mysupport", "", settings=settings)


def test_client_rejects_invalid_site(settings):
    with pytest.raises(InvalidURI):
        Client("not a site", "key", settings=settings)


def test_from_settings(settings, fake_api):
    client = Client.from_settings(settings, http_transport=fake_api.transport)
    assert client.site == "mysupport"
    assert client.persistent is False
    assert client.sleep_between_requests == 0.5


def test_from_settings_requires_site():
    with pytest.raises(LoveError):
        Client.from_settings(ClientSettings(_env_file=None, api_key="key"))


def test_connect_returns_unconnected_client(settings):
    client = connect("mysupport", "key", settings=settings)
    assert isinstance(client, Client)
    assert not client.persistent
    assert not client.connected


def test_session_is_persistent_and_closes(settings, fake_api):
    fake_api.add("/mysupport/users/1", {"id": 1})

    with session("mysupport", "key", settings=settings, http_transport=fake_api.transport) as client:
        assert client.persistent
        client.get_user(1)
        connection = client.connection

    assert connection.is_closed


def test_session_closes_connection_on_error(settings, fake_api):
    fake_api.add("/mysupport/users/1", {"id": 1})

    with pytest.raises(RuntimeError):
        with session("mysupport", "key", settings=settings, http_transport=fake_api.transport) as client:
            client.get_user(1)
            connection = client.connection
            raise RuntimeError("caller failed")

    assert connection.is_closed


def test_package_exports():
    assert love.connect is connect
    assert love.session is session
    assert love.__version__


def test_iter_collection_accepts_resource_kind(make_client, fake_api, make_records):
    fake_api.add_collection("/mysupport/users", "users", make_records(3))

    records = list(make_client().iter_collection(ResourceKind.USERS, "users"))

    assert [r["id"] for r in records] == [1, 2, 3]


def test_plain_client_ignores_env_files(tmp_path):
    (tmp_path / ".env").write_text("TENDER_API_HOST=evil.example\n", encoding="utf-8")
    user_env = tmp_path / "config" / "love-tender" / ".env"
    user_env.parent.mkdir(parents=True)
    user_env.write_text("TENDER_API_HOST=evil.example\n", encoding="utf-8")

    client = connect("mysupport", "key")

    assert client.settings.api_host == "api.tenderapp.com"
    assert client.uris.collection_uri("users") == "https://api.tenderapp.com/mysupport/users"


def test_from_settings_reads_user_env_file(tmp_path):
    user_env = tmp_path / "config" / "love-tender" / ".env"
    user_env.parent.mkdir(parents=True)
    user_env.write_text("TENDER_SITE=fromuser\nTENDER_API_KEY=userkey\n", encoding="utf-8")

    client = Client.from_settings()

    assert client.site == "fromuser"
    assert client.api_key == "userkey"

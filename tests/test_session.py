from __future__ import annotations

import binascii

import pytest
from pydantic import BaseModel, ValidationError

from remote_webdriver.api.element import Element
from remote_webdriver.api.session import Session
from remote_webdriver.api.window import Window
from remote_webdriver.bus.mock import BusCall, ScriptedBus
from remote_webdriver.errors import (
    InvalidArgumentError,
    RequestError,
    ScreenshotDecodeError,
    UnexpectedResponseError,
)
from remote_webdriver.models import Cookie, Offset, Selector, x_offset, xy_offset, y_offset


@pytest.fixture
def bus() -> ScriptedBus:
    return ScriptedBus()


@pytest.fixture
def session(bus: ScriptedBus) -> Session:
    return Session(bus)


def test_delete_targets_session_root(session: Session, bus: ScriptedBus) -> None:
    session.delete()
    assert bus.calls == [BusCall("DELETE", "")]


class ClosingBus(ScriptedBus):
    def __init__(self, *args, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(*args, **kwargs)
        self.closed = False

    def close(self) -> None:
        self.closed = True


def test_close_releases_bus_without_deleting() -> None:
    bus = ClosingBus()
    Session(bus).close()
    assert bus.closed is True
    assert bus.calls == []


def test_context_manager_deletes_then_closes() -> None:
    bus = ClosingBus({("GET", "title"): "Example"})

    with Session(bus) as session:
        assert session.get_title() == "Example"

    assert bus.calls == [BusCall("GET", "title"), BusCall("DELETE", "")]
    assert bus.closed is True


def test_context_manager_closes_when_delete_fails() -> None:
    bus = ClosingBus({("DELETE", ""): RequestError("request unsuccessful: gone")})

    with pytest.raises(RequestError):
        with Session(bus):
            pass

    assert bus.closed is True


def test_delete_propagates_remote_error(session: Session, bus: ScriptedBus) -> None:
    bus.respond("DELETE", "", RequestError("request unsuccessful: no such session"))
    with pytest.raises(RequestError, match="no such session"):
        session.delete()


def test_get_element_returns_bound_element(session: Session, bus: ScriptedBus) -> None:
    bus.respond("POST", "element", {"ELEMENT": "el-1"})

    element = session.get_element(Selector.css("#login"))

    assert element.id == "el-1"
    assert element.session is session
    assert bus.last_call == BusCall("POST", "element", {"using": "css selector", "value": "#login"})


def test_get_element_accepts_w3c_reference(session: Session, bus: ScriptedBus) -> None:
    bus.respond("POST", "element", {"element-6066-11e4-a52e-4f735466cecf": "w3c-id"})
    assert session.get_element(Selector.xpath("//a")).id == "w3c-id"


def test_get_element_rejects_malformed_reference(session: Session, bus: ScriptedBus) -> None:
    bus.respond("POST", "element", {"unexpected": "value"})
    with pytest.raises(UnexpectedResponseError):
        session.get_element(Selector.css("a"))


def test_zero_matches_fails_single_lookup_but_not_multi_lookup(
    session: Session, bus: ScriptedBus
) -> None:
    bus.respond("POST", "element", RequestError("request unsuccessful: no such element"))
    bus.respond("POST", "elements", [])
    selector = Selector(using="css selector", value=".missing")

    with pytest.raises(RequestError):
        session.get_element(selector)
    assert session.get_elements(selector) == []


def test_get_elements_preserves_order(session: Session, bus: ScriptedBus) -> None:
    bus.respond("POST", "elements", [{"ELEMENT": "b"}, {"ELEMENT": "a"}])

    elements = session.get_elements(Selector.css("li"))

    assert [element.id for element in elements] == ["b", "a"]
    assert all(element.session is session for element in elements)


def test_get_active_element_sends_no_body(session: Session, bus: ScriptedBus) -> None:
    bus.respond("POST", "element/active", {"ELEMENT": "focused"})

    assert session.get_active_element().id == "focused"
    assert bus.last_call == BusCall("POST", "element/active", None)


def test_get_windows_keeps_server_order(session: Session, bus: ScriptedBus) -> None:
    bus.respond("GET", "window_handles", ["w2", "w1", "w3"])
    assert [window.id for window in session.get_windows()] == ["w2", "w1", "w3"]


def test_set_window_then_get_window_round_trips() -> None:
    class WindowBus(ScriptedBus):
        current = "w0"

        def send(self, method, endpoint, body=None):  # type: ignore[no-untyped-def]
            result = super().send(method, endpoint, body)
            if (method, endpoint) == ("POST", "window"):
                self.current = body["name"]
            if (method, endpoint) == ("GET", "window_handle"):
                return self.current
            return result

    session = Session(WindowBus())
    target = Window("w7", session)

    session.set_window(target)

    assert session.get_window() == target


def test_set_window_by_name(session: Session, bus: ScriptedBus) -> None:
    session.set_window_by_name("popup")
    assert bus.last_call == BusCall("POST", "window", {"name": "popup"})


def test_delete_window(session: Session, bus: ScriptedBus) -> None:
    session.delete_window()
    assert bus.last_call == BusCall("DELETE", "window")


def test_get_cookies_decodes_records(session: Session, bus: ScriptedBus) -> None:
    bus.respond(
        "GET",
        "cookie",
        [
            {"name": "sid", "value": "abc", "domain": "example.com", "httpOnly": True},
            {"name": "theme", "value": "dark", "sameSite": "Lax"},
        ],
    )

    cookies = session.get_cookies()

    assert [cookie.name for cookie in cookies] == ["sid", "theme"]
    assert cookies[0].http_only is True
    assert cookies[1].to_payload()["sameSite"] == "Lax"


def test_set_cookie_wraps_cookie_payload(session: Session, bus: ScriptedBus) -> None:
    session.set_cookie(Cookie(name="sid", value="abc", path="/"))
    assert bus.last_call == BusCall(
        "POST", "cookie", {"cookie": {"name": "sid", "value": "abc", "path": "/"}}
    )


def test_set_cookie_rejects_missing_cookie_without_sending(
    session: Session, bus: ScriptedBus
) -> None:
    with pytest.raises(InvalidArgumentError, match="nil cookie is invalid"):
        session.set_cookie(None)
    assert bus.calls == []


def test_delete_cookie_by_name_and_all(session: Session, bus: ScriptedBus) -> None:
    session.delete_cookie("sid")
    session.delete_cookies()
    assert bus.calls == [BusCall("DELETE", "cookie/sid"), BusCall("DELETE", "cookie")]


def test_get_screenshot_decodes_base64(session: Session, bus: ScriptedBus) -> None:
    bus.respond("GET", "screenshot", "QUJD")
    assert session.get_screenshot() == b"ABC"


def test_get_screenshot_accepts_wrapped_base64(session: Session, bus: ScriptedBus) -> None:
    bus.respond("GET", "screenshot", "QUJD\nREVG\r\n")
    assert session.get_screenshot() == b"ABCDEF"


def test_get_screenshot_rejects_non_string_payload(session: Session, bus: ScriptedBus) -> None:
    bus.respond("GET", "screenshot", {"value": "QUJD"})
    with pytest.raises(ScreenshotDecodeError):
        session.get_screenshot()


def test_get_screenshot_rejects_malformed_base64(session: Session, bus: ScriptedBus) -> None:
    bus.respond("GET", "screenshot", "not base64!")
    with pytest.raises(ScreenshotDecodeError) as excinfo:
        session.get_screenshot()
    assert isinstance(excinfo.value.__cause__, binascii.Error)


def test_navigation_and_document_commands(session: Session, bus: ScriptedBus) -> None:
    bus.respond("GET", "url", "https://example.com/")
    bus.respond("GET", "title", "Example Domain")
    bus.respond("GET", "source", "<html></html>")

    session.set_url("https://example.com")
    assert session.get_url() == "https://example.com/"
    assert session.get_title() == "Example Domain"
    assert session.get_source() == "<html></html>"
    session.forward()
    session.back()
    session.refresh()

    assert bus.calls == [
        BusCall("POST", "url", {"url": "https://example.com"}),
        BusCall("GET", "url"),
        BusCall("GET", "title"),
        BusCall("GET", "source"),
        BusCall("POST", "forward"),
        BusCall("POST", "back"),
        BusCall("POST", "refresh"),
    ]


def test_double_click(session: Session, bus: ScriptedBus) -> None:
    session.double_click()
    assert bus.last_call == BusCall("POST", "doubleclick")


@pytest.mark.parametrize(
    ("offset", "expected"),
    [
        (None, {}),
        (x_offset(10), {"xoffset": 10}),
        (y_offset(-4), {"yoffset": -4}),
        (xy_offset(0, 0), {"xoffset": 0, "yoffset": 0}),
        (Offset(), {}),
    ],
)
def test_move_to_omits_absent_axes(
    session: Session, bus: ScriptedBus, offset: Offset, expected: dict
) -> None:
    session.move_to(None, offset)

    body = bus.last_call.body
    assert bus.last_call.endpoint == "moveto"
    assert body == expected
    assert "element" not in body


def test_move_to_includes_region(session: Session, bus: ScriptedBus) -> None:
    region = Element("el-9", session)
    session.move_to(region, x_offset(3))
    assert bus.last_call == BusCall("POST", "moveto", {"element": "el-9", "xoffset": 3})


def test_frame_without_element_sends_null_id(session: Session, bus: ScriptedBus) -> None:
    session.frame(None)
    assert bus.last_call == BusCall("POST", "frame", {"id": None})
    assert "id" in bus.last_call.body


def test_frame_with_element_sends_reference(session: Session, bus: ScriptedBus) -> None:
    session.frame(Element("frame-1", session))
    assert bus.last_call == BusCall("POST", "frame", {"id": {"ELEMENT": "frame-1"}})


def test_frame_parent(session: Session, bus: ScriptedBus) -> None:
    session.frame_parent()
    assert bus.last_call == BusCall("POST", "frame/parent")


def test_execute_normalises_missing_arguments(session: Session, bus: ScriptedBus) -> None:
    bus.respond("POST", "execute", 42)

    assert session.execute("return 42;") == 42
    assert bus.last_call == BusCall("POST", "execute", {"script": "return 42;", "args": []})


def test_execute_passes_arguments(session: Session, bus: ScriptedBus) -> None:
    session.execute("return arguments[0] + arguments[1];", (1, 2))
    assert bus.last_call.body == {"script": "return arguments[0] + arguments[1];", "args": [1, 2]}


def test_execute_validates_result_type(session: Session, bus: ScriptedBus) -> None:
    class Dimensions(BaseModel):
        width: int
        height: int

    bus.respond("POST", "execute", {"width": 800, "height": "600"})

    result = session.execute("return dims;", [], Dimensions)

    assert result == Dimensions(width=800, height=600)


def test_execute_result_type_mismatch_raises(session: Session, bus: ScriptedBus) -> None:
    bus.respond("POST", "execute", "not a list")
    with pytest.raises(ValidationError):
        session.execute("return 1;", None, list[int])


def test_alert_commands(session: Session, bus: ScriptedBus) -> None:
    bus.respond("GET", "alert_text", "Are you sure?")

    assert session.get_alert_text() == "Are you sure?"
    session.set_alert_text("yes")
    session.accept_alert()
    session.dismiss_alert()

    assert bus.calls[1:] == [
        BusCall("POST", "alert_text", {"text": "yes"}),
        BusCall("POST", "accept_alert"),
        BusCall("POST", "dismiss_alert"),
    ]


def test_new_logs_decodes_entries(session: Session, bus: ScriptedBus) -> None:
    bus.respond(
        "POST",
        "log",
        [{"message": "boom", "level": "SEVERE", "timestamp": 1_700_000_000_000, "source": "js"}],
    )

    logs = session.new_logs("browser")

    assert bus.last_call == BusCall("POST", "log", {"type": "browser"})
    assert len(logs) == 1
    assert logs[0].message == "boom"
    assert logs[0].level == "SEVERE"
    assert logs[0].time.year == 2023


def test_get_log_types(session: Session, bus: ScriptedBus) -> None:
    bus.respond("GET", "log/types", ["browser", "driver"])
    assert session.get_log_types() == ["browser", "driver"]


def test_every_query_refetches(session: Session, bus: ScriptedBus) -> None:
    bus.respond("GET", "window_handles", ["w1"])
    session.get_windows()
    session.get_windows()
    assert len(bus.calls) == 2

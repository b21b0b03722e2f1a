import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from mailer46.errors import BuildError, MissingRecipient
from mailer46.message import DEFAULT_SUBJECT, Email, EmailBuilder, HtmlBody, TextBody


def test_build_joins_recipients_in_order() -> None:
    email = (
        EmailBuilder()
        .to("a@example.com")
        .to("b@example.com")
        .to("c@example.com")
        .build()
    )
    assert email.to == "a@example.com,b@example.com,c@example.com"


def test_build_single_recipient_has_no_separator() -> None:
    assert EmailBuilder().to("only@example.com").build().to == "only@example.com"


def test_build_without_recipient_fails() -> None:
    builder = EmailBuilder().sender("me@example.com").subject("Hi").text_body("x")
    with pytest.raises(MissingRecipient) as excinfo:
        builder.build()
    assert excinfo.value.field == "to"
    assert isinstance(excinfo.value, BuildError)


def test_subject_defaults_to_placeholder() -> None:
    email = EmailBuilder().to("a@example.com").build()
    assert email.subject == DEFAULT_SUBJECT == "no subject"
    assert email.sender is None
    assert email.body is None


def test_setters_replace_previous_values() -> None:
    email = (
        EmailBuilder()
        .sender("first@example.com")
        .sender("second@example.com")
        .subject("one")
        .subject("two")
        .to("a@example.com")
        .build()
    )
    assert email.sender == "second@example.com"
    assert email.subject == "two"


def test_text_body_replaces_html_body() -> None:
    email = EmailBuilder().to("a@example.com").html_body("<b>hi</b>").text_body("hi").build()
    assert email.body == TextBody("hi")
    form = email.to_form()
    assert form["text"] == "hi"
    assert "html" not in form


def test_html_body_replaces_text_body() -> None:
    email = EmailBuilder().to("a@example.com").text_body("hi").html_body("<b>hi</b>").build()
    form = email.to_form()
    assert form["html"] == "<b>hi</b>"
    assert "text" not in form


def test_generic_body_setter() -> None:
    email = EmailBuilder().to("a@example.com").body(HtmlBody("<p>x</p>")).build()
    assert email.body == HtmlBody("<p>x</p>")


def test_serialize_html_email_fields() -> None:
    email = Email(
        sender="niclas",
        to="someoneelse",
        subject="Subject",
        body=HtmlBody("HELLO"),
    )
    assert email.to_form() == {
        "from": "niclas",
        "to": "someoneelse",
        "subject": "Subject",
        "html": "HELLO",
    }


def test_serialize_without_body_omits_body_fields() -> None:
    form = EmailBuilder().to("a@example.com").subject("S").build().to_form()
    assert form == {"to": "a@example.com", "subject": "S"}


def test_email_is_immutable() -> None:
    email = EmailBuilder().to("a@example.com").build()
    with pytest.raises(AttributeError):
        email.to = "b@example.com"  # type: ignore[misc]

"""
HTML form extraction and submission payloads.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

BUTTON_INPUT_TYPES = {"submit", "image", "button"}
SKIPPED_INPUT_TYPES = {"reset", "file"}


@dataclass(frozen=True)
class FormButton:
    """
    A control that submits its form.
    """

    name: str | None
    value: str
    kind: str = "submit"

    def payload(self) -> list[tuple[str, str]]:
        if not self.name:
            return []
        if self.kind == "image":
            return [(f"{self.name}.x", "0"), (f"{self.name}.y", "0")]
        return [(self.name, self.value)]


@dataclass(frozen=True)
class HTMLForm:
    """
    Snapshot of one form: resolved action, method, field values and buttons.
    """

    name: str
    action: str
    method: str
    fields: tuple[tuple[str, str], ...]
    buttons: tuple[FormButton, ...] = ()

    def has_field(self, name: str) -> bool:
        return any(field_name == name for field_name, _ in self.fields)

    def with_value(self, name: str, value: str) -> "HTMLForm":
        """
        Copy of the form with every field called `name` set to `value`.
        """

        if not self.has_field(name):
            raise KeyError(name)
        fields = tuple(
            (field_name, value if field_name == name else field_value)
            for field_name, field_value in self.fields
        )
        return replace(self, fields=fields)

    @property
    def primary_button(self) -> FormButton | None:
        return self.buttons[0] if self.buttons else None

    def submission(self, button: FormButton | None = None) -> list[tuple[str, str]]:
        """
        Payload a browser would send when `button` (default: the first one) is pressed.
        """

        pressed = button or self.primary_button
        payload = list(self.fields)
        if pressed is not None:
            payload.extend(pressed.payload())
        return payload


def find_form(soup: BeautifulSoup, name: str, *, page_url: str) -> HTMLForm | None:
    """
    Locate a form by its `name` attribute, falling back to its `id`.
    """

    element = soup.find("form", attrs={"name": name}) or soup.find("form", id=name)
    if not isinstance(element, Tag):
        return None
    return parse_form(element, page_url=page_url, name=name)


def parse_form(element: Tag, *, page_url: str, name: str | None = None) -> HTMLForm:
    action = str(element.get("action") or "").strip()
    method = str(element.get("method") or "get").strip().upper()
    fields: list[tuple[str, str]] = []
    buttons: list[FormButton] = []

    for control in element.find_all(["input", "button", "select", "textarea"]):
        if not isinstance(control, Tag) or control.has_attr("disabled"):
            continue
        if control.name == "button":
            button_type = str(control.get("type") or "submit").strip().lower()
            if button_type == "submit":
                buttons.append(
                    FormButton(
                        name=_optional_attr(control, "name"),
                        value=str(control.get("value") or ""),
                    )
                )
            continue

        control_name = _optional_attr(control, "name")
        if control.name == "input":
            input_type = str(control.get("type") or "text").strip().lower()
            if input_type in BUTTON_INPUT_TYPES:
                buttons.append(
                    FormButton(
                        name=control_name,
                        value=str(control.get("value") or ""),
                        kind=input_type,
                    )
                )
                continue
            if control_name is None or input_type in SKIPPED_INPUT_TYPES:
                continue
            if input_type in {"checkbox", "radio"}:
                if control.has_attr("checked"):
                    fields.append((control_name, str(control.get("value") or "on")))
                continue
            fields.append((control_name, str(control.get("value") or "")))
        elif control_name is None:
            continue
        elif control.name == "select":
            fields.extend((control_name, value) for value in _selected_options(control))
        elif control.name == "textarea":
            fields.append((control_name, control.get_text()))

    return HTMLForm(
        name=name or _optional_attr(element, "name") or "",
        action=urljoin(page_url, action) if action else page_url,
        method=method if method in {"GET", "POST"} else "GET",
        fields=tuple(fields),
        buttons=tuple(buttons),
    )


def _selected_options(select: Tag) -> list[str]:
    options = [option for option in select.find_all("option") if isinstance(option, Tag)]
    selected = [option for option in options if option.has_attr("selected")]
    if not selected and options and not select.has_attr("multiple"):
        selected = options[:1]
    return [_option_value(option) for option in selected]


def _option_value(option: Tag) -> str:
    value = option.get("value")
    if value is None:
        return option.get_text().strip()
    return str(value)


def _optional_attr(element: Tag, attr: str) -> str | None:
    value = element.get(attr)
    if value is None:
        return None
    stripped = str(value).strip()
    return stripped or None

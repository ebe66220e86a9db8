"""Rendering view markup into a region of the page document.

A region is a `bs4.Tag` owned by the page. It is either fully replaced, or
patched in place by walking the fresh markup and the current region side by
side in document order. The walk pairs tags by position only, so `update`
must only be used while the view's template produces the same tag layout
for the old and the new data. A layout change falls back to a full render.
"""
from collections.abc import Collection
from enum import Enum
import logging
from typing import Any, Protocol

import bs4
from jinja2 import Environment


logger = logging.getLogger(__name__)


class MarkupView(Protocol):
    default_message: str
    error_message: str

    def generate_markup(self, data: Any) -> str:
        ...


class ViewState(Enum):
    idle = "idle"
    loading = "loading"
    rendered = "rendered"
    error = "error"
    message = "message"


def fragment(markup: str) -> bs4.BeautifulSoup:
    return bs4.BeautifulSoup(markup, features="html.parser")


def replace_children(parent: bs4.Tag, markup: str) -> None:
    parent.clear()
    for node in list(fragment(markup).contents):
        parent.append(node.extract())


def first_text(tag: bs4.Tag) -> str:
    child = next(iter(tag.contents), None)
    if isinstance(child, bs4.NavigableString):
        return child.strip()
    return ""


def reconcile(parent: bs4.Tag, markup: str) -> bool:
    """Patch `parent` towards `markup`. False if the tag layouts differ."""
    new_tags = fragment(markup).find_all(True)
    current_tags = parent.find_all(True)
    if len(new_tags) != len(current_tags):
        return False

    for new, current in zip(new_tags, current_tags):
        if new == current:
            continue
        if first_text(new):
            current.string = new.get_text()
        for name, value in new.attrs.items():
            current[name] = value if isinstance(value, str) else list(value)
    return True


def is_empty(data: Any) -> bool:
    if data is None:
        return True
    return isinstance(data, Collection) and not isinstance(data, str) and not data


class Renderer:
    def __init__(
        self,
        parent: bs4.Tag,
        view: MarkupView,
        *,
        env: Environment,
    ) -> None:
        self.parent = parent
        self.view = view
        self.env = env
        self.data: Any = None
        self.state = ViewState.idle

    def __repr__(self) -> str:
        return f"<Renderer(view={type(self.view).__name__}, state={self.state.value})>"

    def render(self, data: Any, *, render: bool = True) -> str | None:
        """Replace the region with the view's markup for `data`.

        Missing or empty data renders the error state instead. With
        `render=False` the markup is returned and the region is left alone.
        """
        if is_empty(data):
            self.render_error()
            return None

        self.data = data
        markup = self.view.generate_markup(data)
        if not render:
            return markup

        replace_children(self.parent, markup)
        self.state = ViewState.rendered
        return None

    def update(self, data: Any) -> None:
        self.data = data
        markup = self.view.generate_markup(data)
        if not reconcile(self.parent, markup):
            logger.warning(
                "%s changed layout between renders, rendering in full.",
                type(self.view).__name__,
            )
            replace_children(self.parent, markup)
        self.state = ViewState.rendered

    def render_spinner(self) -> None:
        replace_children(self.parent, self.env.get_template("spinner.html").render())
        self.state = ViewState.loading

    def render_error(self, message: str | None = None) -> None:
        message = self.view.error_message if message is None else message
        replace_children(
            self.parent,
            self.env.get_template("error.html").render(message=message),
        )
        self.state = ViewState.error

    def render_message(self, message: str | None = None) -> None:
        message = self.view.default_message if message is None else message
        replace_children(
            self.parent,
            self.env.get_template("message.html").render(message=message),
        )
        self.state = ViewState.message

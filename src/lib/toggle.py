"""
Page-wide code language toggle

A page shows exactly one language variant of every multi-language code
sample. The active language lives in a SelectionContext, one per page,
passed explicitly to initialize(), select() and visibility_apply().

Rendered code-<language> nodes are wrapped in LanguageBlocks that
subscribe to the context. Selecting a language notifies every subscribed
block on the page, not only the one the reader interacted with.

Usage:
    context = SelectionContext()
    blocks_attach(context, result.nodes)
    initialize(context, page_attributes)     # reads data-code if present
    select(context, "kotlin")                # flips every block
"""

from typing import Any, Iterable, List, Mapping, Optional, Protocol, Union

from ..models.tags import Child, ContentNode, LanguageCode
from .errors import UnsupportedLanguageError
from .log import LOG, WARN


class LanguageSubscriber(Protocol):
    """Anything that reacts to a change of the selected language"""

    def update(self, selected: LanguageCode) -> None:
        ...


class LanguageBlock:
    """
    Subscriber wrapping one language-marked content node

    Visibility is expressed through the node's HTML hidden attribute.
    update() writes the state from scratch, so it never depends on what a
    previous pass left behind.
    """

    def __init__(self, node: ContentNode) -> None:
        if node.language is None:
            raise ValueError(f"<{node.tag}> node carries no language marker")
        self.node = node

    @property
    def language(self) -> LanguageCode:
        return self.node.language  # type: ignore[return-value]

    @property
    def visible(self) -> bool:
        return not self.node.hidden

    def update(self, selected: LanguageCode) -> None:
        if self.language == selected:
            self.node.attributes.pop("hidden", None)
        else:
            self.node.attributes["hidden"] = True

    def __repr__(self) -> str:
        state = "visible" if self.visible else "hidden"
        return f"LanguageBlock({self.language.value}, {state})"


class SelectionContext:
    """
    Shared language selection of one page

    Attributes:
        default: Language used while nothing has been selected
        selected: Explicitly selected language, None until initialize()
    """

    def __init__(self, default: Optional[Union[LanguageCode, str]] = None) -> None:
        if default is None:
            from ..config import appsettings
            default = appsettings.defaultLanguage_get()
        self.default = language_parse(default)
        self.selected: Optional[LanguageCode] = None
        self._subscribers: List[LanguageSubscriber] = []

    def language_get(self) -> LanguageCode:
        """Currently effective language"""
        return self.selected if self.selected is not None else self.default

    @property
    def subscribers(self) -> List[LanguageSubscriber]:
        return list(self._subscribers)

    def subscribe(self, subscriber: LanguageSubscriber) -> LanguageSubscriber:
        """
        Register a subscriber and bring it up to date immediately.

        Subscribing the same subscriber, or a second LanguageBlock for an
        already subscribed node, returns the existing subscription.
        """
        for existing in self._subscribers:
            if existing is subscriber or (
                isinstance(existing, LanguageBlock)
                and isinstance(subscriber, LanguageBlock)
                and existing.node is subscriber.node
            ):
                return existing
        self._subscribers.append(subscriber)
        subscriber.update(self.language_get())
        return subscriber

    def unsubscribe(self, subscriber: LanguageSubscriber) -> None:
        self._subscribers = [s for s in self._subscribers if s is not subscriber]

    def notify(self) -> None:
        selected = self.language_get()
        for subscriber in list(self._subscribers):
            subscriber.update(selected)


def language_parse(code: Any) -> LanguageCode:
    """
    Validate a language code against the closed set.

    Raises:
        UnsupportedLanguageError: If code is not a supported language
    """
    if isinstance(code, LanguageCode):
        return code
    try:
        return LanguageCode(code)
    except (ValueError, TypeError):
        raise UnsupportedLanguageError(code, [c.value for c in LanguageCode]) from None


def blocks_attach(context: SelectionContext, nodes: Iterable[Child]) -> List[LanguageBlock]:
    """
    Subscribe every language-marked node of a rendered tree.

    Returns:
        The subscribed blocks, in document order
    """
    blocks: List[LanguageBlock] = []
    for item in nodes:
        if not isinstance(item, ContentNode):
            continue
        for node in item.walk():
            if node.language is not None:
                block = context.subscribe(LanguageBlock(node))
                blocks.append(block)  # type: ignore[arg-type]
    LOG(f"Attached {len(blocks)} language blocks", level=2)
    return blocks


def initialize(
    context: SelectionContext,
    page_attributes: Optional[Mapping[str, Any]] = None,
    attribute: Optional[str] = None,
) -> LanguageCode:
    """
    Set the selection from the page's persisted attribute, else the default.

    Runs once per page load, then performs the first visibility pass.

    Args:
        context: Selection of the page being initialized
        page_attributes: Attributes of the root page element
        attribute: Name of the persisted attribute (default: settings)

    Returns:
        The selected language
    """
    if attribute is None:
        from ..config import appsettings
        attribute = appsettings.persisted_attribute

    persisted = (page_attributes or {}).get(attribute)
    selected = context.default
    if persisted is not None:
        try:
            selected = language_parse(persisted)
        except UnsupportedLanguageError as e:
            WARN(f"Ignoring persisted page attribute '{attribute}': {e}")

    context.selected = selected
    LOG(f"Language selection initialized to '{selected.value}'", level=2)
    visibility_apply(context)
    return selected


def visibility_apply(context: SelectionContext) -> None:
    """
    Show blocks of the selected language, hide all others.

    Idempotent: with an unchanged selection, repeated passes leave every
    block in the same state.
    """
    context.notify()


def select(context: SelectionContext, code: Union[LanguageCode, str]) -> LanguageCode:
    """
    Select a language for the whole page.

    Raises:
        UnsupportedLanguageError: Before any state change, if code is not
            a supported language
    """
    language = language_parse(code)
    context.selected = language
    LOG(f"Language selected: '{language.value}'", level=2)
    visibility_apply(context)
    return language

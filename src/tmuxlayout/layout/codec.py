"""tmux layout descriptor codec.

Descriptors are what ``#{window_layout}`` prints and ``select-layout``
accepts. A single 80x24 pane with id %5 is ``b262,80x24,0,0,5``; a left
pane beside a right column of two panes looks like::

    <checksum>,159x48,0,0{79x48,0,0,1,79x48,80,0[79x24,80,0,2,79x23,80,25,3]}

Grammar::

    descriptor := checksum "," node
    node       := W "x" H "," X "," Y ( "," pane_id | "{" nodes "}" | "[" nodes "]" )
    nodes      := node ( "," node )*

``{}`` holds the children of a left-to-right split, ``[]`` of a top-to-bottom
split. The checksum is four hex digits over everything after the first comma.
"""

import itertools
from dataclasses import dataclass

from tmuxlayout.errors import ChecksumMismatchError, UnbalancedBracketsError, UnexpectedTokenError

from .types import Leaf, LayoutNode, Orientation, Split

_OPENERS = {o.opener: o for o in Orientation}
_CLOSERS = {o.closer for o in Orientation}


def layout_checksum(body: str) -> int:
    """tmux's layout checksum: rotate the 16-bit accumulator right, add the char."""
    csum = 0
    for ch in body:
        csum = ((csum >> 1) | ((csum & 1) << 15)) + ord(ch)
        csum &= 0xFFFF
    return csum


def format_checksum(body: str) -> str:
    return f"{layout_checksum(body):04x}"


@dataclass
class DecodedLayout:
    """Result of decoding a descriptor.

    Attributes:
        tree: The decoded layout tree, leaves carrying tmux pane ids
        checksum: Checksum as embedded in the descriptor
        checksum_mismatch: Set when the embedded checksum is wrong; decoding
            still succeeds because tmux's own output is authoritative
    """

    tree: LayoutNode
    checksum: str
    checksum_mismatch: ChecksumMismatchError | None = None


def parse_layout(text: str, strict: bool = False) -> DecodedLayout:
    """Decode a layout descriptor.

    Args:
        text: Descriptor string
        strict: Raise on checksum mismatch instead of reporting it

    Returns:
        DecodedLayout

    Raises:
        UnexpectedTokenError: Malformed token or trailing input.
        UnbalancedBracketsError: Missing or mismatched closing bracket.
        ChecksumMismatchError: Only when ``strict`` is set.
    """
    parser = _Parser(text.strip())
    checksum = parser.checksum()
    body_start = parser.pos
    tree = parser.node()
    parser.end()

    computed = format_checksum(parser.text[body_start:])
    mismatch = None
    if computed != checksum.lower():
        mismatch = ChecksumMismatchError(embedded=checksum, computed=computed)
        if strict:
            raise mismatch

    return DecodedLayout(tree=tree, checksum=checksum, checksum_mismatch=mismatch)


def serialize_layout(node: LayoutNode) -> str:
    """Encode a tree as a descriptor with a freshly computed checksum.

    Leaves without a pane id are numbered by their pre-order position.
    """
    counter = itertools.count()
    body = _emit(node, counter)
    return f"{format_checksum(body)},{body}"


def _emit(node: LayoutNode, counter) -> str:
    geom = f"{node.width}x{node.height},{node.x},{node.y}"
    if isinstance(node, Leaf):
        index = next(counter)
        pane_id = node.pane_id if node.pane_id is not None else index
        return f"{geom},{pane_id}"
    children = ",".join(_emit(child, counter) for child in node.children)
    return f"{geom}{node.orientation.opener}{children}{node.orientation.closer}"


class _Parser:
    """Recursive descent over the descriptor text."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def peek(self) -> str | None:
        return self.text[self.pos] if self.pos < len(self.text) else None

    def fail(self, expected: str) -> UnexpectedTokenError:
        found = self.peek()
        return UnexpectedTokenError(self.pos, "end of input" if found is None else found, expected)

    def expect(self, ch: str) -> None:
        if self.peek() != ch:
            raise self.fail(repr(ch))
        self.pos += 1

    def number(self) -> int:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos].isdigit():
            self.pos += 1
        if start == self.pos:
            raise self.fail("a number")
        return int(self.text[start:self.pos])

    def checksum(self) -> str:
        start = self.pos
        while self.peek() is not None and self.peek() in "0123456789abcdefABCDEF":
            self.pos += 1
        if self.pos - start != 4:
            raise self.fail("a 4-digit hex checksum")
        value = self.text[start:self.pos]
        self.expect(",")
        return value

    def node(self) -> LayoutNode:
        width = self.number()
        self.expect("x")
        height = self.number()
        self.expect(",")
        x = self.number()
        self.expect(",")
        y = self.number()

        ch = self.peek()
        if ch == ",":
            self.pos += 1
            pane_id = self.number()
            return Leaf(width=width, height=height, x=x, y=y, pane_id=pane_id)
        if ch in _OPENERS:
            orientation = _OPENERS[ch]
            self.pos += 1
            children = self.children(orientation)
            return Split(
                orientation=orientation,
                children=children,
                width=width,
                height=height,
                x=x,
                y=y,
            )
        raise self.fail("',' or a bracket")

    def children(self, orientation: Orientation) -> list[LayoutNode]:
        children = [self.node()]
        while True:
            ch = self.peek()
            if ch == ",":
                self.pos += 1
                children.append(self.node())
            elif ch == orientation.closer:
                self.pos += 1
                return children
            elif ch is None or ch in _CLOSERS:
                raise UnbalancedBracketsError(self.pos, orientation.closer, ch)
            else:
                raise self.fail(f"',' or {orientation.closer!r}")

    def end(self) -> None:
        if self.pos != len(self.text):
            raise self.fail("end of input")

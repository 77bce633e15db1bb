"""
Hack Assembly Language Parser
=============================

This module turns raw source lines into statements the assembler can
process. Parsing is purely lexical: symbols are not resolved and mnemonics
are not checked against the opcode tables here.

Statement Types
---------------
1. **LabelDef**: Label declaration, consumes no instruction slot
   ```asm
   (LOOP)
   ```

2. **AInstruction**: Address instruction, literal or symbolic
   ```asm
   @21
   @LOOP
   @i
   ```

3. **CInstruction**: Computation instruction, ``dest=comp;jump`` with
   optional dest and jump fields
   ```asm
   D=M
   D;JGT
   AM=M-1
   0;JMP
   ```

Lexical Rules
-------------
- ``//`` starts a comment that runs to end of line
- Leading and trailing whitespace is ignored, blank lines are skipped
- Whitespace inside a computation instruction is insignificant (``D = M``)
- Symbols are a letter, ``_``, ``.``, ``$`` or ``:`` followed by those
  characters or digits
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from hackasm.errors import AssemblySyntaxError, SourceLocation


COMMENT_MARKER = "//"
ADDRESS_MARKER = "@"

SYMBOL_PATTERN = re.compile(r"[A-Za-z_.$:][A-Za-z0-9_.$:]*")
DECIMAL_PATTERN = re.compile(r"[0-9]+")


# =============================================================================
# Statement Data Classes
# =============================================================================

@dataclass
class Statement:
    """
    Base class for all parsed statements.

    Attributes:
        location: Where the statement starts in the source
        text: The statement with comments and surrounding whitespace removed
    """
    location: SourceLocation
    text: str


@dataclass
class LabelDef(Statement):
    """
    Label declaration.

    Attributes:
        name: Label name without the parentheses
    """
    name: str


@dataclass
class AInstruction(Statement):
    """
    Address instruction.

    Attributes:
        target: Decimal literal or symbol name following the @ marker
    """
    target: str

    @property
    def is_literal(self) -> bool:
        return DECIMAL_PATTERN.fullmatch(self.target) is not None


@dataclass
class CInstruction(Statement):
    """
    Computation instruction.

    Attributes:
        comp: Computation expression
        dest: Destination text, or None when there is no '='
        jump: Jump text, or None when there is no ';'
    """
    comp: str
    dest: Optional[str] = None
    jump: Optional[str] = None


# =============================================================================
# Line Handling
# =============================================================================

def strip_line(line: str) -> str:
    """Remove any comment and surrounding whitespace from a source line."""
    return line.split(COMMENT_MARKER, 1)[0].strip()


def parse_line(line: str, line_number: int,
               filename: str = "<input>") -> Optional[Statement]:
    """
    Classify a single source line.

    Args:
        line: Raw source text
        line_number: 1-indexed line number, for error reporting
        filename: Source name, for error reporting

    Returns:
        The parsed statement, or None for blank and comment-only lines

    Raises:
        AssemblySyntaxError: For malformed labels or address instructions
    """
    text = strip_line(line)
    if not text:
        return None

    column = len(line) - len(line.lstrip()) + 1
    location = SourceLocation(filename, line_number, column)

    if text.startswith("(") or text.endswith(")"):
        return _parse_label(text, location)

    if text.startswith(ADDRESS_MARKER):
        return _parse_address(text, location)

    return _parse_computation(text, location)


def _parse_label(text: str, location: SourceLocation) -> LabelDef:
    if not (text.startswith("(") and text.endswith(")")) or len(text) < 2:
        raise AssemblySyntaxError(
            "unbalanced parentheses in label declaration",
            location=location,
            source_line=text,
            hint="labels are written as (NAME)",
        )

    name = text[1:-1].strip()
    if not name:
        raise AssemblySyntaxError(
            "empty label name",
            location=location,
            source_line=text,
        )

    if not SYMBOL_PATTERN.fullmatch(name):
        raise AssemblySyntaxError(
            f"invalid label name '{name}'",
            location=location,
            source_line=text,
            hint="labels may not contain whitespace or parentheses, "
                 "or start with a digit",
        )

    return LabelDef(location=location, text=text, name=name)


def _parse_address(text: str, location: SourceLocation) -> AInstruction:
    target = text[len(ADDRESS_MARKER):].strip()
    if not target:
        raise AssemblySyntaxError(
            "address instruction without a target",
            location=location,
            source_line=text,
        )

    if not (DECIMAL_PATTERN.fullmatch(target) or SYMBOL_PATTERN.fullmatch(target)):
        raise AssemblySyntaxError(
            f"invalid address target '{target}'",
            location=location,
            source_line=text,
            hint="use a non-negative decimal number or a symbol name",
        )

    return AInstruction(location=location, text=text, target=target)


def _parse_computation(text: str, location: SourceLocation) -> CInstruction:
    body = "".join(text.split())
    dest = None
    jump = None

    if "=" in body:
        dest, body = body.split("=", 1)

    if ";" in body:
        body, jump = body.split(";", 1)

    return CInstruction(location=location, text=text, comp=body, dest=dest, jump=jump)


def parse_lines(lines: Iterable[str], filename: str = "<input>") -> list[Statement]:
    """
    Parse a sequence of source lines.

    Blank and comment-only lines are dropped; the remaining statements keep
    their source order.
    """
    statements = []
    for number, line in enumerate(lines, start=1):
        stmt = parse_line(line.rstrip("\r\n"), number, filename)
        if stmt is not None:
            statements.append(stmt)
    return statements


def parse_source(source: str, filename: str = "<input>") -> list[Statement]:
    """Parse source text (see parse_lines)."""
    return parse_lines(source.splitlines(), filename)

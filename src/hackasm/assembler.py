"""
Hack Assembler - Main Interface
===============================

This module provides the main Assembler class, which coordinates the parser,
symbol table and encoder to turn Hack assembly into 16-bit machine words.

Assembly Process
----------------
1. **Parsing**: strip comments and whitespace, classify each line as a
   label declaration, address instruction or computation instruction.

2. **Pass 1 (label collection)**: walk the statements with an instruction
   counter starting at 0. Labels bind to the counter and consume no slot;
   every other statement takes one slot.

3. **Pass 2 (encoding)**: encode each instruction against the complete
   label set. Address instructions naming an unbound symbol allocate a
   variable from RAM address 16 upward.

Each run builds a fresh SymbolTable, so assembling the same source twice
gives the same words. The first error aborts the run and no words are kept.

Example Usage
-------------
>>> from hackasm import Assembler, format_word
>>> asm = Assembler()
>>> words = asm.assemble_string('''
... // Computes R1 = R0 + 1
...     @R0
...     D=M+1
...     @R1
...     M=D
... ''')
>>> [format_word(w) for w in words][:2]
['0000000000000000', '1111110111010000']
>>> asm.write_hack("Add.hack")

Command-Line Usage
------------------
    $ hackasm Add.asm -o Add.hack -s Add.sym -l Add.lst
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from hackasm.encoder import encode_address, encode_fields, format_word
from hackasm.errors import AssemblerError
from hackasm.parser import (
    AInstruction,
    CInstruction,
    LabelDef,
    Statement,
    parse_lines,
)
from hackasm.symbols import SymbolKind, SymbolTable

logger = logging.getLogger(__name__)


class Assembler:
    """
    Main Hack assembler class.

    Attributes:
        verbose: If True, print progress messages
        strict: If True (default), unknown destination and jump mnemonics are
            errors. If False they encode as 000 with a logged warning.
            Unknown computations are always errors.
    """

    def __init__(self, verbose: bool = False, strict: bool = True):
        """
        Initialize the assembler.

        Args:
            verbose: Enable verbose output
            strict: Mnemonic policy for destination and jump fields
        """
        self._verbose = verbose
        self._strict = strict
        self._source_file: Optional[Path] = None
        self._symbols = SymbolTable()
        self._statements: list[Statement] = []
        self._instructions: list[Statement] = []
        self._words: list[int] = []

    @property
    def strict(self) -> bool:
        return self._strict

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_lines(self, lines: Iterable[str], filename: str = "<input>") -> list[int]:
        """
        Assemble a sequence of source lines.

        Args:
            lines: Source lines in order
            filename: Virtual filename for error messages

        Returns:
            One 16-bit word per non-label instruction, in source order

        Raises:
            AssemblerError: On the first error; no output is retained
        """
        self._symbols = SymbolTable()
        self._statements = []
        self._instructions = []
        self._words = []

        try:
            self._statements = parse_lines(lines, filename)
            if self._verbose:
                print(f"Parsed {len(self._statements)} statements")

            self._instructions = self._pass1(self._statements)
            words = self._pass2(self._instructions)
        except AssemblerError:
            self._statements = []
            self._instructions = []
            raise

        self._words = words

        if self._verbose:
            print(f"Generated {len(words)} words, "
                  f"{len(self._symbols.labels())} labels, "
                  f"{len(self._symbols.variables())} variables")

        return list(words)

    def assemble_string(self, source: str, filename: str = "<input>") -> list[int]:
        """
        Assemble source code from a string.

        Args:
            source: Assembly source code
            filename: Virtual filename for error messages

        Returns:
            Encoded machine words

        Raises:
            AssemblerError: If assembly fails
        """
        if self._verbose:
            print("Assembling from string...")

        return self.assemble_lines(source.splitlines(), filename)

    def assemble_file(self, filepath: str | Path) -> list[int]:
        """
        Assemble source code from a file.

        Args:
            filepath: Path to assembly source file

        Returns:
            Encoded machine words

        Raises:
            AssemblerError: If assembly fails
            FileNotFoundError: If source file not found
        """
        filepath = Path(filepath)
        self._source_file = filepath

        if self._verbose:
            print(f"Assembling {filepath}...")

        source = filepath.read_text()
        return self.assemble_lines(source.splitlines(), str(filepath))

    # =========================================================================
    # Pass 1: Label Collection
    # =========================================================================

    def _pass1(self, statements: list[Statement]) -> list[Statement]:
        """
        First pass: bind labels to instruction addresses.

        Returns:
            The non-label statements in source order
        """
        instructions: list[Statement] = []
        counter = 0

        for stmt in statements:
            if isinstance(stmt, LabelDef):
                self._symbols.bind(stmt.name, counter, stmt.location, stmt.text)
                continue

            instructions.append(stmt)
            counter += 1

        logger.debug(f"Pass 1: {counter} instructions, "
                     f"{len(self._symbols.labels())} labels")
        return instructions

    # =========================================================================
    # Pass 2: Encoding
    # =========================================================================

    def _pass2(self, instructions: list[Statement]) -> list[int]:
        """Second pass: resolve symbols and encode every instruction."""
        words = []

        for stmt in instructions:
            if isinstance(stmt, AInstruction):
                words.append(self._encode_address(stmt))
            elif isinstance(stmt, CInstruction):
                words.append(encode_fields(
                    stmt.comp, stmt.dest, stmt.jump,
                    strict=self._strict,
                    location=stmt.location,
                    source_line=stmt.text,
                ))
            else:
                raise AssemblerError(
                    f"unexpected statement '{stmt.text}' in pass 2",
                    location=stmt.location,
                )

        logger.debug(f"Pass 2: {len(words)} words, "
                     f"next variable at {self._symbols.next_variable_address}")
        return words

    def _encode_address(self, inst: AInstruction) -> int:
        if inst.is_literal:
            address = int(inst.target)
        else:
            address = self._symbols.allocate_variable(inst.target, inst.location)

        return encode_address(address, inst.location, inst.text)

    # =========================================================================
    # Output Methods
    # =========================================================================

    def get_words(self) -> list[int]:
        """Get the words from the last successful run."""
        return list(self._words)

    def get_lines(self) -> list[str]:
        """Get the words from the last run rendered as 16-character binary text."""
        return [format_word(word) for word in self._words]

    def get_symbols(self) -> dict[str, int]:
        """
        Get the symbol table.

        Returns:
            Dictionary mapping symbol names to addresses, predefined included
        """
        return self._symbols.as_dict()

    def get_symbol_table(self) -> SymbolTable:
        return self._symbols

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        Each instruction shows its ROM address, binary word and source text.
        Labels are listed on their own line before the instruction they mark.
        """
        lines = ["ADDR  WORD              SOURCE"]
        words = iter(self._words)
        address = 0

        for stmt in self._statements:
            if isinstance(stmt, LabelDef):
                lines.append(f"{'':22}  {stmt.text}")
                continue

            word = next(words, None)
            if word is None:
                break
            lines.append(f"{address:04d}  {format_word(word)}  {stmt.text}")
            address += 1

        return "\n".join(lines) + "\n"

    def write_hack(self, filepath: str | Path) -> None:
        """
        Write the .hack output: one 16-character binary word per line.

        Args:
            filepath: Output file path
        """
        text = "".join(f"{line}\n" for line in self.get_lines())
        Path(filepath).write_text(text)

        if self._verbose:
            print(f"Wrote {len(self._words)} words to {filepath}")

    def write_listing(self, filepath: str | Path) -> None:
        """Write assembly listing file."""
        Path(filepath).write_text(self.get_listing())

        if self._verbose:
            print(f"Wrote listing to {filepath}")

    def write_symbols(self, filepath: str | Path, include_predefined: bool = False) -> None:
        """
        Write symbol table file.

        Lists labels and variables in binding order as NAME ADDRESS KIND.

        Args:
            filepath: Output file path
            include_predefined: Also list SP, R0-R15, SCREEN, etc.
        """
        lines = []
        for sym in self._symbols:
            if sym.kind == SymbolKind.PREDEFINED and not include_predefined:
                continue
            lines.append(f"{sym.name:<24} {sym.address:5d}  {sym.kind}")

        Path(filepath).write_text("".join(f"{line}\n" for line in lines))

        if self._verbose:
            print(f"Wrote symbols to {filepath}")


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>", strict: bool = True) -> list[int]:
    """
    Convenience function to assemble source code.

    Args:
        source: Assembly source code
        filename: Virtual filename for errors
        strict: Mnemonic policy (see Assembler)

    Returns:
        Encoded machine words

    Raises:
        AssemblerError: If assembly fails
    """
    asm = Assembler(strict=strict)
    return asm.assemble_string(source, filename)


def assemble_file(filepath: str | Path, strict: bool = True) -> list[int]:
    """
    Convenience function to assemble a file.

    Raises:
        AssemblerError: If assembly fails
    """
    asm = Assembler(strict=strict)
    return asm.assemble_file(filepath)

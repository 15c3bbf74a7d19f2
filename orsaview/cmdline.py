"""Command line parsing into options and positional arguments.

Options are created with :func:`make_switch` and :func:`make_option` and added
to a :class:`CmdLine`. ``CmdLine.process`` removes the options it recognises
from the argument list and returns the positional arguments left over.
An option with argument accepts the forms ``-l 2``, ``-l2``, ``--level 2``
and ``--level=2``; switches may be grouped, as in ``-ab``.
"""

from __future__ import annotations

import copy
import re
from typing import Any, Callable, List, Optional, Sequence

_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class CmdLineError(ValueError):
    """The command line holds an unknown option or an unreadable value."""


def _parse_int(text: str) -> int:
    stripped = text.strip()
    if not _INT_RE.fullmatch(stripped):
        raise ValueError(f"not an integer: {text!r}")
    return int(stripped)


def _parse_float(text: str) -> float:
    stripped = text.strip()
    if not _FLOAT_RE.fullmatch(stripped):
        raise ValueError(f"not a number: {text!r}")
    return float(stripped)


class Option:
    """Base of switches and options with an argument."""

    def __init__(self, c: Optional[str], name: str = "") -> None:
        if c is not None and len(c) > 1:
            raise ValueError(f"short option name must be one character, got {c!r}")
        self.c = c or ""
        self.long_name = name or ""
        self.used = False
        self.desc = ""
        self.section = ""

    def doc(self, description: str) -> "Option":
        """Set the description and return the option itself."""
        self.desc = description
        return self

    def label(self) -> str:
        """Option identifier as shown in the usage text."""
        text = ""
        if self.c:
            text += "-" + self.c + (", " if self.long_name else "")
        if self.long_name:
            text += "--" + self.long_name
        return text

    def _match_switch(self, args: Sequence[str]) -> Optional[List[str]]:
        arg = args[0]
        if (self.c and arg == "-" + self.c) or (
            self.long_name and arg == "--" + self.long_name
        ):
            self.used = True
            return list(args[1:])
        if self.c and arg.startswith("-" + self.c):
            # Several switches grouped in one argument: drop this letter only.
            self.used = True
            return ["-" + arg[2:], *args[1:]]
        return None

    def check(self, args: Sequence[str]) -> Optional[List[str]]:
        """Try to read the option at ``args[0]``.

        Returns the arguments left once the option is consumed, or None if
        ``args[0]`` is not this option.
        """
        raise NotImplementedError

    def value_text(self) -> str:
        """Current value as displayed in the usage text (empty if none)."""
        return ""


class OptionSwitch(Option):
    """An option without argument, on or off."""

    def check(self, args: Sequence[str]) -> Optional[List[str]]:
        return self._match_switch(args)


class OptionField(Option):
    """An option holding a value whose type is that of its default.

    A ``bool`` default makes the option behave as a switch that sets the value
    to True. A ``str`` takes its argument verbatim; ``int`` and ``float`` must
    read completely. Other types are read with their ``parse`` class method,
    or with their constructor.
    """

    def __init__(self, c: Optional[str], default: Any, name: str = "") -> None:
        super().__init__(c, name)
        self.value = default
        self._is_switch = isinstance(default, bool)
        self._parser = self._parser_for(default)

    @staticmethod
    def _parser_for(default: Any) -> Callable[[str], Any]:
        if isinstance(default, bool):
            return lambda text: True
        if isinstance(default, str):
            return str
        if isinstance(default, int):
            return _parse_int
        if isinstance(default, float):
            return _parse_float
        kind = type(default)
        return getattr(kind, "parse", kind)

    def read_param(self, param: str) -> None:
        """Store ``param`` decoded as the option's type; ValueError if unreadable."""
        try:
            self.value = self._parser(param)
        except (ValueError, TypeError) as exc:
            raise ValueError(f"cannot read {param!r}") from exc

    def check(self, args: Sequence[str]) -> Optional[List[str]]:
        if self._is_switch:
            remaining = self._match_switch(args)
            if remaining is not None:
                self.value = True
            return remaining

        arg = args[0]
        long_eq = "--" + self.long_name + "="
        if (self.c and arg == "-" + self.c) or (
            self.long_name and arg == "--" + self.long_name
        ):
            if len(args) <= 1:
                raise CmdLineError(f"Option {arg} requires argument")
            param, consumed = args[1], 2
        elif self.c and arg.startswith("-" + self.c):
            param, consumed = arg[2:], 1
        elif self.long_name and arg.startswith(long_eq):
            param, consumed = arg[len(long_eq):], 1
        else:
            return None
        try:
            self.read_param(param)
        except ValueError:
            raise CmdLineError(
                f"Unable to interpret {param} as argument of {arg}"
            ) from None
        self.used = True
        return list(args[consumed:])

    def label(self) -> str:
        text = super().label()
        if self._is_switch:
            return text
        return text + ("=" if self.long_name else " ") + "ARG"

    def value_text(self) -> str:
        if self._is_switch:
            return ""
        if isinstance(self.value, float):
            return format(self.value, "g")
        return str(self.value)


def make_switch(c: Optional[str], name: str = "") -> OptionSwitch:
    """New switch, invoked by ``-c`` or ``--name``."""
    return OptionSwitch(c, name)


def make_option(c: Optional[str], default: Any, name: str = "") -> OptionField:
    """New option whose value has the type and initial value of ``default``."""
    return OptionField(c, default, name)


def _looks_like_number(arg: str) -> bool:
    return _FLOAT_RE.fullmatch(arg) is not None


class CmdLine:
    """A set of options, able to parse a command line and describe itself."""

    def __init__(self) -> None:
        self._options: List[Option] = []
        self.prefix_doc = ""
        self.align_doc = 0
        self.show_defaults = True
        self.section = ""

    @property
    def options(self) -> List[Option]:
        return list(self._options)

    def add(self, option: Option) -> Option:
        """Add a copy of ``option`` in the current section and return the copy."""
        added = copy.copy(option)
        added.section = self.section
        self._options.append(added)
        return added

    def process(self, argv: Sequence[str]) -> List[str]:
        """Parse ``argv`` (without program name) and return positional arguments.

        A ``--`` argument stops option parsing. An argument starting with '-'
        that is no option is accepted only if it reads as a number.
        """
        for option in self._options:
            option.used = False
        rest = list(argv)
        positional: List[str] = []
        while rest:
            arg = rest[0]
            if arg == "--":
                positional.extend(rest[1:])
                break
            for option in self._options:
                remaining = option.check(rest)
                if remaining is not None:
                    rest = remaining
                    break
            else:
                if len(arg) > 1 and arg.startswith("-") and not _looks_like_number(arg):
                    raise CmdLineError(f"Unrecognized option {arg}")
                positional.append(arg)
                rest = rest[1:]
        self._options.sort(key=lambda option: option.section)
        return positional

    def _find(self, key: str) -> Option:
        for option in self._options:
            if (option.c and option.c == key) or (
                option.long_name and option.long_name == key
            ):
                return option
        raise KeyError(f"no option {key!r}")

    def used(self, c: str) -> bool:
        """Whether the option named ``c`` appeared in the last parsed line."""
        return self._find(c).used

    def value(self, c: str) -> Any:
        """Value of the option named ``c``; for a plain switch, whether it was used."""
        option = self._find(c)
        if isinstance(option, OptionField):
            return option.value
        return option.used

    def only_section(self, section: str) -> "CmdLine":
        """New command line with the same settings and only the options of ``section``."""
        other = CmdLine()
        other.prefix_doc = self.prefix_doc
        other.align_doc = self.align_doc
        other.show_defaults = self.show_defaults
        other.section = self.section
        other._options = [
            copy.copy(option) for option in self._options if option.section == section
        ]
        return other

    def format(self) -> str:
        """Usage text: one line per option, with section headers if several."""
        if not self._options:
            return ""
        lines = []
        previous = self._options[-1].section
        show_section = self._options[0].section != previous
        for option in self._options:
            if show_section and previous != option.section:
                previous = option.section
                lines.append(previous + "\n")
            head = self.prefix_doc + option.label() + " "
            line = head.ljust(self.align_doc) + option.desc
            text = option.value_text()
            if self.show_defaults and text:
                line += f" ({text})"
            lines.append(line + "\n")
        return "".join(lines)

    def __str__(self) -> str:
        return self.format()
"""
Help/usage rendering.

render_help(parser, width) builds a rich renderable with:
- usage line: program name, bracketed optionals, then positionals in order,
  wrapped with a hanging indent at the terminal width;
- description paragraph;
- "positionals" and "options" groups with names, metavars and help text,
  plus choices / default / required annotations;
- epilog paragraph.

Palette keys
- usage-label, program-name, description-section, epilog-section
- group-label, argument-description, annotation
- option-name, flag-name, positional-name, metavar, choice
- panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed.
"""
from collections import defaultdict, deque

from rich.console import Group
from rich.containers import Lines
from rich.panel import Panel
from rich.text import Text

from .nargs import ExactlyOne, Optional, ZeroOrMore, OneOrMore, ExactlyN
from .utils import Unset

PADDING = 2
INDENT = 24


def render_help(parser, width, /):
    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",  # cyan
        "program-name": "bold #FF4D94",  # magenta-pink
        "description-section": "italic #A3A3A3",
        "epilog-section": "#737373",

        "group-label": "bold #FFFFFF",
        "argument-description": "#9CA3AF",
        "annotation": "dim #9CA3AF",

        "option-name": "bold #00E6FF",
        "flag-name": "bold #22C55E",
        "positional-name": "bold #36C5F0",
        "metavar": "bold #FFD600",
        "choice": "bold #FF4D94",

        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if parser.colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not parser.colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styler(style))

    def names(spec):
        shorts = sorted((alias for alias in spec.aliases if not alias.startswith("--")), key=len)
        longs = sorted((alias for alias in spec.aliases if alias.startswith("--")), key=len)
        style = "flag-name" if spec.flag else "option-name"
        return Text(", ").join(text(alias, style) for alias in shorts + longs)

    def metavar(spec, *, simple=False):
        if spec.choices:
            label = Text.assemble("{", Text(",").join(text(choice, "choice") for choice in spec.choices), "}")
        else:
            label = text(spec.display, "positional-name" if spec.positional else "metavar")
        if simple:
            return label

        match spec.nargs:
            case ExactlyOne():
                return label
            case Optional():
                return Text.assemble("[", label, "]")
            case ZeroOrMore():
                return Text.assemble("[", label, " ...]")
            case OneOrMore():
                return Text.assemble(label, " [", label, " ...]")
            case ExactlyN(count):
                return Text(" ").join(label.copy() for _ in range(count))

    def annotations(spec):
        notes = []
        if spec.required:
            notes.append("required")
        if spec.preset is not Unset:
            default = spec.default if isinstance(spec.default, str) else " ".join(spec.default)
            notes.append("default: %s" % (default if default else "''"))
        if not notes:
            return Text("")
        return text("(%s)" % ", ".join(notes), "annotation")

    optionals = [spec for spec in parser.registry if not spec.positional]
    positionals = [spec for spec in parser.registry if spec.positional]

    renders = []

    usage = Text()
    usage.append("usage", styler("usage-label")).append(": ")
    usage.append(text(parser.prog, "program-name")).append(" ")
    offset = len(usage)

    inputs = deque()
    for spec in optionals:
        shortest = text(min(spec.aliases, key=len), "flag-name" if spec.flag else "option-name")
        if spec.flag:
            item = shortest
        else:
            item = Text.assemble(shortest, " ", metavar(spec))
        inputs.append(item if spec.required else Text.assemble("[", item, "]"))
    for spec in positionals:
        item = metavar(spec)
        inputs.append(item if spec.required or spec.nargs.minimum == 0 else Text.assemble("[", item, "]"))

    try:
        lines = Lines([inputs.popleft()])
    except IndexError:
        lines = Lines()
    while inputs:
        if len(lines[-1]) + 1 + len(input := inputs.popleft()) > width - offset:
            lines.append(input)
        else:
            lines[-1].append(Text(" ") + input)

    try:
        usage.append(lines.pop(0))
    except IndexError:
        pass
    for line in lines:
        usage.append("\n").append(" " * offset).append(line)
    renders.append(usage.append("\n"))

    if parser.description:
        renders.append(text(parser.description, "description-section").append("\n"))

    groups = Text()
    for group, specs in (("positionals", positionals), ("options", optionals)):
        if not specs:
            continue
        if groups:
            groups.append("\n")
        groups.append(text(group, "group-label")).append(":\n")

        for spec in specs:
            if spec.positional:
                head = metavar(spec, simple=True)
            elif spec.flag:
                head = names(spec)
            else:
                head = Text.assemble(names(spec), " ", metavar(spec))

            section = Text(" " * PADDING).append(head)
            body = Text(" ").join(part for part in (
                text(spec.help, "argument-description"),
                annotations(spec),
            ) if part)

            if body:
                if len(section) >= INDENT:
                    section.append("\n").append(" " * INDENT)
                else:
                    section.append(" " * (INDENT - len(section)))
                wrapped = body.wrap(parser.stdout, max(width - INDENT, 20))
                try:
                    section.append(wrapped.pop(0))
                except IndexError:
                    pass
                for line in wrapped:
                    section.append("\n").append(" " * INDENT).append(line)

            groups.append(section).append("\n")

    if groups:
        renders.append(groups)

    if parser.epilog:
        renders.append(text(parser.epilog, "epilog-section").append("\n"))

    renders[-1].rstrip()

    renderable = Group(*renders)
    if parser.fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[ ", f"{parser.prog} HELP".upper(), " ]", style=styler("panel-title")),
            title_align="left",
        )
    return renderable


__all__ = (
    "render_help",
)

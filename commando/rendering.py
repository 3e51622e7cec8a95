"""
Commando help rendering.

render(name, preamble, options) builds the rich renderable printed by
Command.print_help() and captured by Command.get_help():

     prog                                    <- header, full console width

    Free text given with set_help(), wrapped to the console width.

    --username/-u <argument>  required       <- one block per distinct option
        Name of the user to greet.

    --verbose/-v  boolean
        Print more.

Palette keys
- header, preamble, option-name, argument-name, metavar, required, boolean,
  default, description

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False no style is applied at all.
"""
from collections import defaultdict

from rich.console import Group
from rich.padding import Padding
from rich.text import Text

from .options import OptionKind


def _spell(key):
    if isinstance(key, int):
        return "arg %d" % key
    return ("-%s" if len(key) == 1 else "--%s") % key


def render(name, preamble, options, /, *, colorful=True):
    """
    build the help renderable.

    parameters
    - name: program name shown in the header (may be None).
    - preamble: free text shown under the header (may be None).
    - options: distinct options in declaration order.
    - colorful: apply the palette when True.
    """
    styles = defaultdict(str, {
        "header": "bold white on green",
        "preamble": "",
        "option-name": "bold",
        "argument-name": "bold",
        "metavar": "dim",
        "required": "bold red",
        "boolean": "cyan",
        "default": "dim italic",
        "description": "",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    renders = [
        Padding(Text(" %s" % (name or ""), style=styler("header")), 0, style=styler("header"), expand=True),
    ]

    if preamble:
        renders.append(Text(""))
        renders.append(Text(preamble, style=styler("preamble")))

    renders.append(Text(""))

    for option in options:
        style = "option-name" if option.kind is OptionKind.NAMED else "argument-name"
        line = Text("/").join(Text(_spell(key), style=styler(style)) for key in option.names)

        if option.kind is OptionKind.NAMED and not option.boolean:
            line.append(" <argument>", style=styler("metavar"))
        if option.required:
            line.append("  required", style=styler("required"))
        if option.boolean:
            line.append("  boolean", style=styler("boolean"))
        if option.has_default():
            line.append("  (default: %r)" % (option.default,), style=styler("default"))

        renders.append(line)
        if option.descr:
            renders.append(Padding(Text(option.descr, style=styler("description")), (0, 0, 0, 4)))
        renders.append(Text(""))

    return Group(*renders)


__all__ = (
    "render",
)

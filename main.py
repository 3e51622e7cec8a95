import logging
import sys

from rich.logging import RichHandler
from rich.pretty import pprint

from commando import Command

command = Command.define().set_help("Greet a user, politely or loudly.")

command.option().require().describe("Greeting word, e.g. hello.")
command.option("u").aka("username").require().describe("Name of the user to greet.")
command.option("l").aka("loud").boolean().default(False).cast(bool).describe("Shout the greeting.")
command.option("debug").boolean().describe("Log how each token was read.")


if __name__ == '__main__':
    logging.basicConfig(
        level=logging.DEBUG if "--debug" in sys.argv else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )

    greeting = "%s, %s" % (command[0], command["username"])
    print(greeting.upper() + "!" if command["loud"] else greeting + ".")

    if command["debug"]:
        pprint(command)

import sys

from rich.pretty import pprint

from flatargs import *

parser = ArgumentParser("copy", "Copy a file a number of times")
parser.add_argument("filename", help="File to copy", required=True)
parser.add_argument("count", "-c", "--count", "Number of copies", type=ValueType.INTEGER, default="1")
parser.add_argument("mode", "-m", "--mode", "Copy strategy", choices=("fast", "safe"), default="safe")
parser.add_argument("verbose", "-v", "--verbose", "Chatty output", action=Action.FLAG)


if __name__ == '__main__':
    try:
        namespace = parser.process
    except ArgumentParserError as error:
        report(error, prog=parser.prog)
        parser.print_help()
        sys.exit(1)
    pprint(namespace)
    pprint({
        "filename": namespace.string("filename"),
        "count": namespace.integer("count", 1),
        "mode": namespace.string("mode"),
        "verbose": namespace.boolean("verbose"),
    })

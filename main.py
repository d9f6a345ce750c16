from rich.pretty import pprint

from argwright import *

parser = ArgumentParser("main", description="copy files around")
parser.add_argument("source", help="file to copy")
parser.add_argument("-c", "--count", nargs=1, default=1, help="number of copies")
parser.add_argument("-v", "--verbose", action="count", help="more output")

modes = parser.add_mutually_exclusive_group()
modes.add_argument("--force", action="store_true", help="overwrite existing files")
modes.add_argument("--dry-run", action="store_true", help="only print what would happen")

subcommands = parser.add_subparsers(title="targets", dest="target")
local = subcommands.add_parser("local", aliases=("here",), help="copy into a directory")
local.add_argument("directory")
remote = subcommands.add_parser("remote", help="copy to a host")
remote.add_argument("host")
remote.add_argument("--port", nargs=1, default=22)


if __name__ == '__main__':
    pprint(parser.parse_args())

import argparse
import logging
import sys
import jsonschema
import toml
from .config import Config, load_config, init_config_if_missing, default_config_fn
from .generate import PasswordGenerator, PasswordGenerationException, CharacterClass

logger = logging.getLogger(__name__)

def setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

def make_generator(config: Config, args) -> PasswordGenerator:
    if args.template is not None:
        return PasswordGenerator.from_template(args.template)

    overrides = {}
    for char_class in CharacterClass:
        name = char_class.name.lower()
        if getattr(args, name) is not None:
            overrides[name] = getattr(args, name)

    gen = Config({**config.dict(), **overrides}).generator()
    if args.length is not None:
        gen.set_length(args.length)
    return gen

def fail(message):
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)

def main_generate(args):
    setup_logging(args.verbose)
    try:
        config = load_config(args.config_toml)
    except (toml.TomlDecodeError, jsonschema.ValidationError) as e:
        fail(f"invalid config file {args.config_toml}: {e}")

    for _ in range(args.count):
        try:
            gen = make_generator(config, args)
            logger.debug("Generating password: %s", gen.describe())
            password = gen.generate()
        except PasswordGenerationException as e:
            fail(f"unable to generate password: {e}")
        except ValueError as e:
            fail(str(e))
        print(password)

def main_init_config(args):
    if init_config_if_missing(args.config_toml):
        print(f"Default configuration written to {args.config_toml}.")
    else:
        print(f"Configuration {args.config_toml} already exists.")

def generate_options_parser():
    # Defaults are suppressed so that a subcommand never overwrites options
    # given before it. apply_defaults() fills in whatever is still missing.
    parser = argparse.ArgumentParser(add_help=False,
        argument_default=argparse.SUPPRESS)
    parser.add_argument("-c", "--config", dest="config_toml",
        help="Configuration file")
    parser.add_argument("-l", "--length", type=int,
        help="Password length")
    parser.add_argument("-t", "--template",
        help="Template like 'Aaaaaa!aaaaaa5' giving length and character classes")
    parser.add_argument("-n", "--count", type=int,
        help="Number of passwords to generate (default: 1)")
    for char_class in CharacterClass:
        name = char_class.name.lower()
        parser.add_argument(f"--{name}", action=argparse.BooleanOptionalAction,
            help=f"Include {char_class.label}")
    parser.add_argument("-v", "--verbose", action="store_true",
        help="Trace the generator configuration to stderr")
    return parser

def apply_defaults(args):
    defaults = {
        "config_toml": default_config_fn(),
        "length": None,
        "template": None,
        "count": 1,
        "verbose": False,
    }
    for char_class in CharacterClass:
        defaults[char_class.name.lower()] = None

    for key, value in defaults.items():
        if not hasattr(args, key):
            setattr(args, key, value)

def main(argv=None):
    generate_options = generate_options_parser()

    ap = argparse.ArgumentParser(prog="passkeep", parents=[generate_options])
    ap.set_defaults(action=main_generate)

    subparsers = ap.add_subparsers(title="Commands")

    parser_generate = subparsers.add_parser("generate",
        parents=[generate_options],
        help="Generate random passwords (default)")
    parser_generate.set_defaults(action=main_generate)

    parser_init = subparsers.add_parser("init-config",
        help="Write default configuration file if missing")
    parser_init.add_argument("config_toml", nargs="?",
        help="Configuration file",
        default=argparse.SUPPRESS)
    parser_init.set_defaults(action=main_init_config)

    args = ap.parse_args(argv)
    apply_defaults(args)

    args.action(args)

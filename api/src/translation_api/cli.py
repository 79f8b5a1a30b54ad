from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from translation_api.config import Settings
from translation_api.drivers.database import DatabaseDriver
from translation_api.errors import InvalidDriver, LanguageExists, TranslationError
from translation_api.logging_config import configure_logging
from translation_api.manager import Driver, build_scanner, resolve_driver
from translation_api.synchronizer import synchronise

logger = logging.getLogger(__name__)


def cmd_list_languages(args: argparse.Namespace, settings: Settings) -> int:
    translation = resolve_driver(args.driver, settings)
    languages = translation.all_languages()
    width = max([len("Language name")] + [len(name) for name in languages.values()])
    print(f"{'Language name':<{width}} | Language")
    for code, name in languages.items():
        print(f"{name:<{width}} | {code}")
    return 0


def cmd_add_language(args: argparse.Namespace, settings: Settings) -> int:
    translation = resolve_driver(args.driver, settings)
    translation.add_language(args.locale, args.name)
    print(f"Language {args.locale} added")
    return 0


def cmd_add_translation_key(args: argparse.Namespace, settings: Settings) -> int:
    translation = resolve_driver(args.driver, settings)
    if args.group:
        group = args.group[: -len(".php")] if args.group.endswith(".php") else args.group
        translation.add_group_translation(args.language, group, args.key, args.value)
    else:
        translation.add_single_translation(args.language, "single", args.key, args.value)
    print("Translation key added")
    return 0


def cmd_sync_missing(args: argparse.Namespace, settings: Settings) -> int:
    translation = resolve_driver(args.driver, settings)
    written = translation.save_missing_translations(args.language)
    print(f"Missing keys synchronised ({written} added)")
    return 0


def cmd_sync_translations(args: argparse.Namespace, settings: Settings) -> int:
    scanner = build_scanner(settings)
    source = resolve_driver(args.source, settings, scanner=scanner)
    target = resolve_driver(args.target, settings, scanner=scanner)

    language = None if args.language in (None, "all") else args.language
    if language is not None and language not in source.all_languages():
        print(f"Invalid language: {language}", file=sys.stderr)
        return 1

    print("Synchronising translations")
    written = synchronise(source, target, language)
    print(f"Translations synchronised ({written} entries)")
    return 0


def cmd_scan(args: argparse.Namespace, settings: Settings) -> int:
    scanner = build_scanner(settings)
    print(json.dumps(scanner.find_translations(), ensure_ascii=False, indent=4, sort_keys=True))
    for failure in scanner.errors:
        print(str(failure), file=sys.stderr)
    return 0


def cmd_upgrade_legacy_groups(args: argparse.Namespace, settings: Settings) -> int:
    translation = resolve_driver(args.driver, settings)
    if not isinstance(translation, DatabaseDriver):
        print("Legacy groups only exist in the database driver", file=sys.stderr)
        return 1
    count = translation.upgrade_legacy_groups(args.language)
    print(f"Legacy rows upgraded: {count}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    drivers = [driver.value for driver in Driver]
    parser = argparse.ArgumentParser(description="Manage translation catalogs across file and database drivers")
    parser.add_argument("--driver", default=None, help=f"Driver to use ({', '.join(drivers)}); defaults to TRANSLATION_DRIVER")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list-languages", help="List all of the available languages")
    p.set_defaults(func=cmd_list_languages)

    p = sub.add_parser("add-language", help="Add a new language")
    p.add_argument("locale")
    p.add_argument("--name", default=None)
    p.set_defaults(func=cmd_add_language)

    p = sub.add_parser("add-translation-key", help="Add a new translation key")
    p.add_argument("language")
    p.add_argument("key")
    p.add_argument("value")
    p.add_argument("--group", default=None, help="Group file; omit for a single translation")
    p.set_defaults(func=cmd_add_translation_key)

    p = sub.add_parser("sync-missing", help="Add missing translation keys for one or all languages")
    p.add_argument("language", nargs="?", default=None)
    p.set_defaults(func=cmd_sync_missing)

    p = sub.add_parser("sync-translations", help="Synchronise translations between drivers")
    p.add_argument("source", metavar="from")
    p.add_argument("target", metavar="to")
    p.add_argument("language", nargs="?", default=None, help="Language code or 'all' (default)")
    p.set_defaults(func=cmd_sync_translations)

    p = sub.add_parser("scan", help="Print the translation keys found in the scan paths")
    p.set_defaults(func=cmd_scan)

    p = sub.add_parser("upgrade-legacy-groups", help="Move rows without a group into 'single'")
    p.add_argument("language", nargs="?", default=None)
    p.set_defaults(func=cmd_upgrade_legacy_groups)
    return parser


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    configure_logging(service_name="translation-cli")
    args = build_parser().parse_args(argv)
    if settings is None:
        settings = Settings.from_env()
    if args.driver is None:
        args.driver = settings.driver

    try:
        return args.func(args, settings)
    except (LanguageExists, InvalidDriver) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except TranslationError as exc:
        logger.error("Command failed", extra={"command": args.command, "detail": str(exc)})
        print(str(exc), file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())

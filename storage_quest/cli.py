"""Command line entrypoint for managing a Storage Quest snapshot."""

import argparse
import sys
from collections.abc import Callable, Sequence

from .app.factory import StoreSession, open_store
from .config import AppConfig, get_config
from .exceptions import ConfigurationError, InvalidGeometryError
from .models import SlotLocation
from .presentation.text_render import render_inventory, render_item, render_store, render_unit
from .services.catalog_forms import submit_new_definition, submit_rename
from .services.drag_drop import apply_drop
from .structured_logging.enhanced_logging_config import (
    bind_store_context,
    clear_store_context,
    get_logger,
    setup_enhanced_logging,
)

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_NOT_APPLIED = 1
EXIT_CONFIG_ERROR = 2


def parse_arguments(argv: Sequence[str] | None = None, config: AppConfig | None = None) -> argparse.Namespace:
    config = config or get_config()
    parser = argparse.ArgumentParser(prog="storage-quest", description="Organize items into storage unit grids.")
    parser.add_argument("--data-dir", dest="data_dir", default=None, help="Directory holding the snapshot file.")
    parser.add_argument("--no-seed", dest="no_seed", action="store_true", help="Do not install demo data.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("show", help="Render the inventory and every unit.")
    subparsers.add_parser("units", help="List units in display order.")
    subparsers.add_parser("definitions", help="List item definitions.")
    subparsers.add_parser("unplaced", help="List items in the inventory pool.")

    add_unit = subparsers.add_parser("add-unit", help="Create a storage unit.")
    add_unit.add_argument("name", nargs="?", default=config.grid.default_unit_name)
    add_unit.add_argument("--rows", type=int, default=config.grid.default_rows)
    add_unit.add_argument("--cols", type=int, default=config.grid.default_cols)

    rename_unit = subparsers.add_parser("rename-unit", help="Rename a storage unit.")
    rename_unit.add_argument("unit_id")
    rename_unit.add_argument("name")

    delete_unit = subparsers.add_parser("delete-unit", help="Delete a storage unit; its items return to inventory.")
    delete_unit.add_argument("unit_id")

    add_definition = subparsers.add_parser("add-definition", help="Create an item definition.")
    add_definition.add_argument("name")
    add_definition.add_argument("--emoji", default="")
    add_definition.add_argument("--color", default=None)

    add_item = subparsers.add_parser("add-item", help="Create an item of a definition.")
    add_item.add_argument("def_id")
    add_item.add_argument("--label", default=None)
    add_item.add_argument("--notes", default=None)

    delete_item = subparsers.add_parser("delete-item", help="Delete an item.")
    delete_item.add_argument("item_id")

    place = subparsers.add_parser("place", help="Move an item into a slot.")
    place.add_argument("item_id")
    place.add_argument("unit_id")
    place.add_argument("row", type=int)
    place.add_argument("col", type=int)

    drop = subparsers.add_parser("drop", help="Drop an item on 'inventory' or 'slot:<unit>:<row>:<col>'.")
    drop.add_argument("item_id")
    drop.add_argument("target")

    remove = subparsers.add_parser("remove", help="Clear a slot.")
    remove.add_argument("unit_id")
    remove.add_argument("row", type=int)
    remove.add_argument("col", type=int)

    where = subparsers.add_parser("where", help="Report where an item is.")
    where.add_argument("item_id")

    return parser.parse_args(argv)


def _applied(result: bool, message: str) -> int:
    if result:
        print(message)
        return EXIT_OK
    print("No change.")
    return EXIT_NOT_APPLIED


def _cmd_show(session: StoreSession, args: argparse.Namespace, config: AppConfig) -> int:
    print(render_store(session.store))
    return EXIT_OK


def _cmd_units(session: StoreSession, args: argparse.Namespace, config: AppConfig) -> int:
    store = session.store
    for unit_id in store.unit_order:
        unit = store.get_unit(unit_id)
        if unit is not None:
            print(f"{unit.id}\t{unit.name}\t{unit.rows}x{unit.cols}\t{len(unit.placed_item_ids())} placed")
    return EXIT_OK


def _cmd_definitions(session: StoreSession, args: argparse.Namespace, config: AppConfig) -> int:
    for definition in session.store.item_definitions.values():
        print(f"{definition.id}\t{definition.emoji}\t{definition.name}")
    return EXIT_OK


def _cmd_unplaced(session: StoreSession, args: argparse.Namespace, config: AppConfig) -> int:
    print(render_inventory(session.store))
    return EXIT_OK


def _cmd_add_unit(session: StoreSession, args: argparse.Namespace, config: AppConfig) -> int:
    try:
        unit_id = session.store.create_unit(args.name, args.rows, args.cols)
    except InvalidGeometryError as exc:
        print(exc.user_friendly)
        return EXIT_NOT_APPLIED
    print(unit_id)
    return EXIT_OK


def _cmd_rename_unit(session: StoreSession, args: argparse.Namespace, config: AppConfig) -> int:
    return _applied(submit_rename(session.store, args.unit_id, args.name), f"Renamed {args.unit_id}.")


def _cmd_delete_unit(session: StoreSession, args: argparse.Namespace, config: AppConfig) -> int:
    return _applied(session.store.delete_unit(args.unit_id), f"Deleted {args.unit_id}.")


def _cmd_add_definition(session: StoreSession, args: argparse.Namespace, config: AppConfig) -> int:
    def_id = submit_new_definition(session.store, args.name, args.emoji, args.color, config.grid)
    if def_id is None:
        print("A definition needs a name.")
        return EXIT_NOT_APPLIED
    print(def_id)
    return EXIT_OK


def _cmd_add_item(session: StoreSession, args: argparse.Namespace, config: AppConfig) -> int:
    print(session.store.create_item(args.def_id, label=args.label, notes=args.notes))
    return EXIT_OK


def _cmd_delete_item(session: StoreSession, args: argparse.Namespace, config: AppConfig) -> int:
    return _applied(session.store.delete_item(args.item_id), f"Deleted {args.item_id}.")


def _cmd_place(session: StoreSession, args: argparse.Namespace, config: AppConfig) -> int:
    placed = session.store.place_item(args.item_id, args.unit_id, args.row, args.col)
    return _applied(placed, f"Placed {args.item_id} at {args.unit_id} ({args.row}, {args.col}).")


def _cmd_drop(session: StoreSession, args: argparse.Namespace, config: AppConfig) -> int:
    return _applied(apply_drop(session.store, args.item_id, args.target), f"Dropped {args.item_id} on {args.target}.")


def _cmd_remove(session: StoreSession, args: argparse.Namespace, config: AppConfig) -> int:
    removed = session.store.remove_item_from_slot(args.unit_id, args.row, args.col)
    return _applied(removed, f"Cleared {args.unit_id} ({args.row}, {args.col}).")


def _cmd_where(session: StoreSession, args: argparse.Namespace, config: AppConfig) -> int:
    store = session.store
    if not store.has_item(args.item_id):
        print(f"Unknown item {args.item_id}.")
        return EXIT_NOT_APPLIED
    location = store.find_item_location(args.item_id)
    label = render_item(store, args.item_id) or args.item_id
    if isinstance(location, SlotLocation):
        unit = store.get_unit(location.unit_id)
        unit_name = unit.name if unit else location.unit_id
        print(f"{label}: {unit_name} ({location.row}, {location.col})")
    else:
        print(f"{label}: inventory")
    return EXIT_OK


COMMANDS: dict[str, Callable[[StoreSession, argparse.Namespace, AppConfig], int]] = {
    "show": _cmd_show,
    "units": _cmd_units,
    "definitions": _cmd_definitions,
    "unplaced": _cmd_unplaced,
    "add-unit": _cmd_add_unit,
    "rename-unit": _cmd_rename_unit,
    "delete-unit": _cmd_delete_unit,
    "add-definition": _cmd_add_definition,
    "add-item": _cmd_add_item,
    "delete-item": _cmd_delete_item,
    "place": _cmd_place,
    "drop": _cmd_drop,
    "remove": _cmd_remove,
    "where": _cmd_where,
}


def _apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    storage_updates: dict[str, object] = {}
    if args.data_dir:
        storage_updates["data_dir"] = args.data_dir
    if args.no_seed:
        storage_updates["seed_on_first_load"] = False
    if not storage_updates:
        return config
    return config.model_copy(update={"storage": config.storage.model_copy(update=storage_updates)})


def main(argv: Sequence[str] | None = None) -> int:
    try:
        config = get_config()
    except ConfigurationError as exc:
        print(exc.user_friendly, file=sys.stderr)
        return EXIT_CONFIG_ERROR
    args = parse_arguments(argv, config)
    config = _apply_overrides(config, args)

    setup_enhanced_logging(config.to_legacy_dict())
    bind_store_context(snapshot_name=config.storage.snapshot_name, command=args.command)
    try:
        session = open_store(config)
        try:
            logger.debug("Running command", command=args.command, seeded=session.seeded)
            return COMMANDS[args.command](session, args, config)
        finally:
            session.close()
    finally:
        clear_store_context()


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

import argparse
import getpass
import json
import logging
from typing import Any

from optidist_sdk import ApiSession, ConfigError, DistributionBuilder, LineItemStatus, load_config
from optidist_sdk.formatting import chart_series, format_currency
from optidist_sdk.models import UserRole

from .app.bootstrap import OptiDistBootstrap
from .app.state import Route
from .services.analytics_service import DISTRIBUTOR_ONLY_SERIES, SERIES_READERS, SHOP_ONLY_SERIES
from .services.errors import ServiceError
from .ui.catalog_view import filter_frames

logger = logging.getLogger(__name__)


class CommandError(RuntimeError):
    pass


def _bootstrap(args: argparse.Namespace) -> OptiDistBootstrap:
    config = load_config(args.env_file)
    return OptiDistBootstrap(config=config, session=ApiSession(config))


def _require_route(app: OptiDistBootstrap, route: Route) -> None:
    if app.navigate(route).route is not route:
        raise CommandError(f"Not allowed: {route.value} (log in with the right account)")


def _print(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str))


def cmd_login(args: argparse.Namespace) -> None:
    app = _bootstrap(args)
    password = args.password or getpass.getpass("Password: ")
    result = app.login(args.username, password)
    if result.error_message:
        raise CommandError(result.error_message)
    _print({"user": app.session.user.model_dump(mode="json"), "route": result.route.value})


def cmd_logout(args: argparse.Namespace) -> None:
    app = _bootstrap(args)
    app.logout()
    _print({"ok": True})


def cmd_whoami(args: argparse.Namespace) -> None:
    app = _bootstrap(args)
    start = app.start()
    if start.route is Route.LOGIN:
        raise CommandError("Not logged in")
    _print({"user": app.session.user.model_dump(mode="json"), "home": start.route.value})


def cmd_shops(args: argparse.Namespace) -> None:
    app = _bootstrap(args)
    _require_route(app, Route.SHOP_MANAGEMENT)
    _print([shop.model_dump(mode="json") for shop in app.shops_service.list_shops()])


def cmd_frames(args: argparse.Namespace) -> None:
    app = _bootstrap(args)
    _require_route(app, Route.PRODUCT_CATALOG)
    frames = filter_frames(app.catalog_service.list_frames(), args.search, {})
    _print(
        [
            {"id": f.id, "product_id": f.product_id, "name": f.name, "brand": f.brand, "price": format_currency(f.price)}
            for f in frames
        ]
    )


def _parse_line(raw: str) -> tuple[int, str, str]:
    parts = raw.split(":")
    if len(parts) != 3 or not parts[0].isdigit():
        raise CommandError(f"Invalid --line {raw!r}: expected SHOP_ID:FRAME_QUERY:QUANTITY")
    return int(parts[0]), parts[1], parts[2]


def cmd_distribute(args: argparse.Namespace) -> None:
    app = _bootstrap(args)
    _require_route(app, Route.INVENTORY_DISTRIBUTION)
    overview = app.distribution_service.overview()
    builder = DistributionBuilder(frames=list(overview.frames))
    for raw in args.line:
        shop_id, query, quantity = _parse_line(raw)
        if not builder.is_selected(shop_id):
            builder.toggle_shop(shop_id)
        index = builder.add_item(shop_id)
        item = builder.type_frame_query(shop_id, index, query)
        exact = [frame for frame in item.search_results if frame.product_id.lower() == query.lower()]
        if exact or len(item.search_results) == 1:
            builder.select_frame(shop_id, index, (exact or item.search_results)[0])
        builder.set_quantity(shop_id, index, quantity)
        if item.status is not LineItemStatus.RESOLVED:
            logger.warning("frame_query_unresolved", extra={"query": query, "matches": len(item.search_results)})
    request = app.distribution_service.prepare(builder.batches.values())
    if args.dry_run:
        _print(request.model_dump(mode="json"))
        return
    response = app.distribution_service.submit(builder.batches.values())
    _print(response.model_dump(mode="json"))


def cmd_analytics(args: argparse.Namespace) -> None:
    app = _bootstrap(args)
    shop_scope = app.session.role is UserRole.SHOP_OWNER
    _require_route(app, Route.SHOP_OWNER_ANALYTICS if shop_scope else Route.DISTRIBUTOR_ANALYTICS)
    if args.series in DISTRIBUTOR_ONLY_SERIES and shop_scope:
        raise CommandError(f"{args.series} is only available to the distributor")
    if args.series in SHOP_ONLY_SERIES and not shop_scope:
        raise CommandError(f"{args.series} is only available to shop owners")
    period = args.period or "month"
    series_args: dict[str, tuple[object, ...]] = {
        "sales-trends": (period,),
        "top-products": (args.limit,),
        "top-products-with-lens": (args.limit,),
        "slow-moving-inventory": (args.days,),
        "low-stock-alerts": (args.threshold,),
        "sales-report": (args.report_type, args.year),
        "shop-performance": (period,),
        "revenue-summary": (period,),
        "summary": (),
    }
    result = app.analytics_service.fetch_series(args.series, *series_args[args.series], shop_scope=shop_scope)
    payload = result.model_dump(mode="json")
    if args.series == "sales-trends":
        payload["chart"] = chart_series(result.trends, "period", ("sales_count", "total_revenue"))
    _print(payload)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="optidist", description="Optical distribution client")
    parser.add_argument("--env-file", default=None)
    parser.add_argument("--verbose", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    login_parser = subparsers.add_parser("login")
    login_parser.add_argument("--username", required=True)
    login_parser.add_argument("--password", default=None)
    login_parser.set_defaults(func=cmd_login)

    subparsers.add_parser("logout").set_defaults(func=cmd_logout)
    subparsers.add_parser("whoami").set_defaults(func=cmd_whoami)
    subparsers.add_parser("shops").set_defaults(func=cmd_shops)

    frames_parser = subparsers.add_parser("frames")
    frames_parser.add_argument("--search", default="")
    frames_parser.set_defaults(func=cmd_frames)

    dist_parser = subparsers.add_parser("distribute")
    dist_parser.add_argument("--line", action="append", required=True, metavar="SHOP_ID:FRAME_QUERY:QUANTITY")
    dist_parser.add_argument("--dry-run", action="store_true")
    dist_parser.set_defaults(func=cmd_distribute)

    analytics_parser = subparsers.add_parser("analytics")
    analytics_parser.add_argument("series", choices=sorted(SERIES_READERS))
    analytics_parser.add_argument("--period", default=None)
    analytics_parser.add_argument("--limit", type=int, default=10)
    analytics_parser.add_argument("--days", type=int, default=90)
    analytics_parser.add_argument("--threshold", type=int, default=5)
    analytics_parser.add_argument("--report-type", default="monthly", choices=("monthly", "quarterly"))
    analytics_parser.add_argument("--year", type=int, default=None)
    analytics_parser.set_defaults(func=cmd_analytics)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    try:
        args.func(args)
    except ServiceError as exc:
        _print({"error": type(exc).__name__, "message": exc.message, "trace_id": exc.trace_id})
        return 1
    except (CommandError, ConfigError) as exc:
        _print({"error": type(exc).__name__, "message": str(exc), "trace_id": None})
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

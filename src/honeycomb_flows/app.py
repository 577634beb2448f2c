"""Litestar application factory and CLI entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from litestar import Litestar
from litestar.datastructures import State
from litestar.di import Provide

from honeycomb_flows.auth.webhook import WebhookAuthenticator, build_extractor
from honeycomb_flows.clients.honeycomb_client import HoneycombClient
from honeycomb_flows.config import ConfigLoader, Settings
from honeycomb_flows.controllers.blocks import BlocksController
from honeycomb_flows.controllers.health import HealthController
from honeycomb_flows.controllers.installation import InstallationController
from honeycomb_flows.controllers.subscription import SubscriptionController
from honeycomb_flows.controllers.webhook import WebhookController
from honeycomb_flows.dao.key_value_dao import KeyValueDAO
from honeycomb_flows.dao.subscription_dao import SubscriptionDAO
from honeycomb_flows.plugins.db_delivery import DbDeliveryPlugin
from honeycomb_flows.plugins.db_key_value import DbKeyValuePlugin
from honeycomb_flows.resources.blocks import BlocksResource
from honeycomb_flows.resources.health import HealthResource
from honeycomb_flows.resources.installation import InstallationResource
from honeycomb_flows.resources.subscription import SubscriptionResource
from honeycomb_flows.resources.webhook import WebhookResource
from honeycomb_flows.services.event_service import EventService
from honeycomb_flows.services.query_service import QueryService
from honeycomb_flows.services.recipient_service import RecipientService
from honeycomb_flows.services.subscription_service import SubscriptionService
from honeycomb_flows.services.trigger_service import TriggerService
from honeycomb_flows.utils.db import Database


class AppFactory:
    """Builds and configures the Litestar application. All methods are static."""

    @staticmethod
    def _build(
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> State:
        """Construct the full object graph once.

        honeycomb_client ─┬→ event_service ──┐
                          ├→ query_service ──┴→ BlocksResource
                          └→ recipient_service → InstallationResource
        pool → kv_dao → kv_plugin ─┬→ recipient_service
                                   └→ authenticator ─┐
        pool → subscription_dao → subscription_service ─┬→ trigger_service ─┴→ WebhookResource
                                                        └→ SubscriptionResource
        HealthResource (standalone)
        """
        pool = Database.init(settings.database_url)
        honeycomb_client = HoneycombClient(
            api_key=settings.api_key,
            base_url=settings.api_base_url,
            timeout=settings.request_timeout_seconds,
            transport=transport,
        )
        kv_plugin = DbKeyValuePlugin(KeyValueDAO(pool))
        subscription_service = SubscriptionService(SubscriptionDAO(pool))

        recipient_service = RecipientService(
            honeycomb_client,
            kv_plugin,
            public_url=settings.public_url,
            name_prefix=settings.webhook_name_prefix,
        )
        query_service = QueryService(
            honeycomb_client,
            max_duration=settings.query_max_duration_seconds,
            poll_interval=settings.query_poll_interval_seconds,
        )
        trigger_service = TriggerService(
            subscription_service, DbDeliveryPlugin(subscription_service),
        )
        authenticator = WebhookAuthenticator(
            kv_plugin, build_extractor(settings.webhook_secret_source),
        )
        return State({
            "health": HealthResource(),
            "installation": InstallationResource(
                recipient_service=recipient_service,
            ),
            "blocks": BlocksResource(
                honeycomb_client=honeycomb_client,
                event_service=EventService(honeycomb_client),
                query_service=query_service,
            ),
            "webhook": WebhookResource(
                authenticator=authenticator,
                trigger_service=trigger_service,
            ),
            "subscriptions": SubscriptionResource(
                subscription_service=subscription_service,
            ),
        })

    @staticmethod
    @asynccontextmanager
    async def _lifespan(app: Litestar) -> AsyncIterator[None]:
        """Create tables on startup, dispose engine on shutdown."""
        await Database.create_tables()
        yield
        await Database.close()

    @staticmethod
    def provide_health(state: State) -> HealthResource:
        """Provide the pre-built HealthResource from app state."""
        health_resource: HealthResource = state.health
        return health_resource

    @staticmethod
    def provide_installation(state: State) -> InstallationResource:
        """Provide the pre-built InstallationResource from app state."""
        installation_resource: InstallationResource = state.installation
        return installation_resource

    @staticmethod
    def provide_blocks(state: State) -> BlocksResource:
        """Provide the pre-built BlocksResource from app state."""
        blocks_resource: BlocksResource = state.blocks
        return blocks_resource

    @staticmethod
    def provide_webhook(state: State) -> WebhookResource:
        """Provide the pre-built WebhookResource from app state."""
        webhook_resource: WebhookResource = state.webhook
        return webhook_resource

    @staticmethod
    def provide_subscriptions(state: State) -> SubscriptionResource:
        """Provide the pre-built SubscriptionResource from app state."""
        subscription_resource: SubscriptionResource = state.subscriptions
        return subscription_resource

    @staticmethod
    def create_app(
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> Litestar:
        """Create and configure the Litestar application.

        ``transport`` replaces the network for outbound Honeycomb calls (tests).
        """
        if settings is None:
            settings = ConfigLoader.load_settings()
        return Litestar(
            route_handlers=[
                HealthController, InstallationController, BlocksController,
                SubscriptionController, WebhookController,
            ],
            state=AppFactory._build(settings, transport),
            lifespan=[AppFactory._lifespan],
            dependencies={
                "health_resource": Provide(AppFactory.provide_health, sync_to_thread=False),
                "installation_resource": Provide(
                    AppFactory.provide_installation, sync_to_thread=False,
                ),
                "blocks_resource": Provide(AppFactory.provide_blocks, sync_to_thread=False),
                "webhook_resource": Provide(AppFactory.provide_webhook, sync_to_thread=False),
                "subscription_resource": Provide(
                    AppFactory.provide_subscriptions, sync_to_thread=False,
                ),
            },
        )


# Public alias so uvicorn can call create_app() without knowing AppFactory.
create_app = AppFactory.create_app


class CLI:
    """Command-line interface for honeycomb-flows."""

    @staticmethod
    def _build_parser() -> argparse.ArgumentParser:
        """Build the CLI argument parser."""
        parser = argparse.ArgumentParser(
            prog="honeycomb-flows", description="Honeycomb Flows integration server",
        )
        subparsers = parser.add_subparsers(dest="command")

        run_parser = subparsers.add_parser("run", help="Start the server")
        run_parser.add_argument("--host", default="0.0.0.0")
        run_parser.add_argument("--port", type=int, default=8000)
        run_parser.add_argument("--reload", action="store_true", help="Auto-reload on file changes")

        return parser

    @staticmethod
    def _configure_logging(level: str) -> None:
        """Send log records to stderr at the configured level."""
        logging.basicConfig(
            level=level.upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    @staticmethod
    def main(argv: list[str] | None = None) -> None:
        """CLI entry point. Catches all exceptions and exits cleanly."""
        parser = CLI._build_parser()
        args = parser.parse_args(argv)

        if args.command is None:
            parser.print_help()
            sys.exit(1)

        try:
            if args.command == "run":
                import uvicorn

                CLI._configure_logging(ConfigLoader.load_settings().log_level)
                uvicorn.run(
                    "honeycomb_flows.app:create_app",
                    factory=True,
                    host=args.host,
                    port=args.port,
                    reload=args.reload,
                )
        except KeyboardInterrupt:
            pass
        except Exception as error:
            print(f"Error: {error}", file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    CLI.main()

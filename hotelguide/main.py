"""hotelguide: FastAPI application entry point."""

import logging
import logging.config
from contextlib import asynccontextmanager
from pathlib import Path

import yaml
from fastapi import FastAPI

from hotelguide import __version__
from hotelguide.api import health, hotels, reports
from hotelguide.config import Settings, get_settings
from hotelguide.logging_setup import configure_structured_logging
from hotelguide.messaging.sqs import SQSQueueTransport, create_sqs_client
from hotelguide.pipeline.consumer import ReportConsumer
from hotelguide.pipeline.producer import ReportProducer
from hotelguide.pipeline.stats_resolver import LocalStatsResolver, RemoteStatsResolver, StatsResolver
from hotelguide.repositories import (
    MongoHotelRepository,
    MongoReportRepository,
    create_mongo_client,
    ensure_indexes,
    get_database,
)

logger = logging.getLogger(__name__)


def setup_logging(config_path: Path = Path("config/logging.yaml")) -> None:
    """Load logging configuration from YAML."""
    if config_path.exists():
        with open(config_path) as f:
            config = yaml.safe_load(f)
        logging.config.dictConfig(config)
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")
    configure_structured_logging()


def build_stats_resolver(settings: Settings, hotel_repo: MongoHotelRepository) -> StatsResolver:
    """Pick the local aggregation or the remote hotel service resolver."""
    if settings.stats_resolver == "remote":
        return RemoteStatsResolver(
            settings.hotel_service_url or "",
            timeout_seconds=settings.stats_timeout_seconds,
            retry_attempts=settings.stats_retry_attempts,
            circuit_breaker_failure_threshold=settings.stats_circuit_breaker_failure_threshold,
            circuit_breaker_recovery_seconds=settings.stats_circuit_breaker_recovery_seconds,
        )
    return LocalStatsResolver(hotel_repo)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_config_path)
    logger.info("hotelguide starting up...")
    mongo_client = None
    report_queue: SQSQueueTransport | None = None
    stats_resolver: StatsResolver | None = None
    report_consumer: ReportConsumer | None = None

    try:
        mongo_client = await create_mongo_client(settings.mongodb_uri)
        mongo_db = get_database(mongo_client, settings.mongodb_database)
        await ensure_indexes(mongo_db)
        app.state.settings = settings
        app.state.mongo_client = mongo_client
        app.state.mongo_db = mongo_db

        hotel_repo = MongoHotelRepository(mongo_db)
        report_repo = MongoReportRepository(mongo_db)
        logger.info("MongoDB connection established (database=%s).", settings.mongodb_database)

        report_queue = SQSQueueTransport(
            create_sqs_client(settings.aws_region, settings.sqs_endpoint_url),
            settings.report_queue_name,
            queue_url=settings.report_queue_url,
            visibility_timeout=settings.report_queue_visibility_timeout_seconds,
        )
        # Fail fast: without a queue neither producer nor consumer can work.
        await report_queue.declare()

        stats_resolver = build_stats_resolver(settings, hotel_repo)
        report_producer = ReportProducer(report_repo=report_repo, queue=report_queue)
        report_consumer = ReportConsumer(
            queue=report_queue,
            report_repo=report_repo,
            stats_resolver=stats_resolver,
            max_messages=settings.consumer_max_messages,
            wait_seconds=settings.consumer_wait_time_seconds,
            receive_error_backoff_seconds=settings.consumer_receive_error_backoff_seconds,
        )

        app.state.hotel_repo = hotel_repo
        app.state.report_repo = report_repo
        app.state.report_queue = report_queue
        app.state.stats_resolver = stats_resolver
        app.state.report_producer = report_producer
        app.state.report_consumer = report_consumer

        if settings.consumer_enabled:
            report_consumer.start()
            logger.info(
                "Report consumer started (queue=%s resolver=%s).",
                settings.report_queue_name,
                settings.stats_resolver,
            )
        else:
            logger.info("Report consumer disabled by configuration.")

        logger.info("hotelguide ready.")
        yield
    finally:
        logger.info("hotelguide shutting down...")
        if report_consumer is not None:
            await report_consumer.stop()
        if stats_resolver is not None:
            await stats_resolver.close()
        if report_queue is not None:
            await report_queue.close()
        if mongo_client is not None:
            mongo_client.close()


app = FastAPI(
    title="hotelguide",
    description="Hotel directory with asynchronous per-location report generation",
    version=__version__,
    lifespan=lifespan,
)
app.include_router(health.router)
app.include_router(hotels.router)
app.include_router(reports.router)

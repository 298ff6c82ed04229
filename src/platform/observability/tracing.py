"""
OpenTelemetry tracing for the cinema booking service.

Use cases open their own spans (`use_case.create_booking`, ...) through
`trace.get_tracer(__name__)`; this module owns the provider those spans land in
plus the FastAPI and SQLAlchemy auto-instrumentation around them.
"""

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

from src.platform.config.core_setting import Settings, settings as default_settings
from src.platform.logging.loguru_io import Logger


# Probe and scrape endpoints never produce spans
UNTRACED_URLS = 'health,metrics'


class TracingConfig:
    def __init__(
        self,
        *,
        service_name: str,
        deploy_env: str = 'local_dev',
        settings: Settings | None = None,
    ) -> None:
        self.service_name = service_name
        self.deploy_env = deploy_env
        self.settings = settings or default_settings
        self._provider: TracerProvider | None = None

    def setup(self) -> None:
        resource = Resource(
            attributes={SERVICE_NAME: self.service_name, 'deployment.environment': self.deploy_env}
        )
        sampler = ParentBased(TraceIdRatioBased(self.settings.OTEL_TRACES_SAMPLE_RATIO))
        self._provider = TracerProvider(resource=resource, sampler=sampler)

        if endpoint := self.settings.OTEL_EXPORTER_OTLP_ENDPOINT:
            exporter = OTLPSpanExporter(endpoint=endpoint)
            self._provider.add_span_processor(BatchSpanProcessor(exporter))
            Logger.base.info(f'📊 [TRACING] Exporting spans to {endpoint}')

        if self.settings.OTEL_CONSOLE_EXPORT:
            self._provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

        trace.set_tracer_provider(self._provider)

    @staticmethod
    def instrument_fastapi(*, app: FastAPI) -> None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls=UNTRACED_URLS)

    @staticmethod
    def instrument_sqlalchemy(*, engine: AsyncEngine) -> None:
        SQLAlchemyInstrumentor().instrument(engine=engine.sync_engine)

    def shutdown(self) -> None:
        if self._provider:
            self._provider.shutdown()

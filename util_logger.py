# ============================================================================
# CLAUDE CONTEXT - LOGGING
# ============================================================================
# STATUS: Core Infrastructure - Structured logging
# PURPOSE: JSON-only structured logging for the GeoJSON Function App
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: ComponentType, LogLevel, LogContext, ContextLoggerAdapter, ComponentConfig, JSONFormatter, LoggerFactory
# INTERFACES: Dataclass models, enums, factory, JSON formatter, request context adapter
# DEPENDENCIES: enum, dataclasses, typing, datetime, logging, json, threading (stdlib only!)
# SOURCE: Application layers define component types
# SCOPE: All logging in the application
# PATTERNS: JSON-only output, Azure Functions integration, LoggerAdapter for request context
# ENTRY_POINTS: LoggerFactory.create_logger(), LoggerFactory.create_with_context()
# ============================================================================

"""
Unified Logger System

Component loggers that emit one JSON object per line on stdout so that
Application Insights can parse them without extra configuration.

Every record carries a ``customDimensions`` block with the component type,
the component name and, when given, the request correlation context
(request id, map layer). Callers add their own dimensions with
``extra={'custom_dimensions': {...}}``.

Design Principles:
- Stdlib only (logging, dataclasses, json)
- Enum safety for component types and levels
- One factory, each component logger configured once

Date: 18 OCT 2026
"""

from enum import Enum
from typing import Optional, Dict, Any
from datetime import datetime, timezone
from dataclasses import dataclass
from functools import partial
import logging
import os
import sys
import json
import threading


# ============================================================================
# COMPONENT TYPES
# ============================================================================

class ComponentType(Enum):
    """
    Component types aligned with the application layers.
    """
    TRIGGER = "trigger"        # HTTP entry point layer
    SERVICE = "service"        # Layer assembly / business logic
    REPOSITORY = "repository"  # Data access layer


# ============================================================================
# LOG LEVELS
# ============================================================================

class LogLevel(Enum):
    """
    Standard Python log levels as enum for type safety.
    """
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_python_level(self) -> int:
        """Convert to Python logging level constant."""
        return getattr(logging, self.value)

    @classmethod
    def from_string(cls, level: str) -> 'LogLevel':
        """Create from string, case-insensitive."""
        return cls[level.upper()]


# ============================================================================
# LOG CONTEXT - Request correlation
# ============================================================================

@dataclass
class LogContext:
    """
    Context for correlating log lines that belong to one HTTP request.
    """
    request_id: Optional[str] = None  # Per-invocation id
    layer: Optional[str] = None  # kecamatan | kelurahan | balita points

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization (None values dropped)."""
        return {
            k: v for k, v in {
                'request_id': self.request_id,
                'layer': self.layer
            }.items() if v is not None
        }


class ContextLoggerAdapter(logging.LoggerAdapter):
    """
    Per-request view over a shared component logger.

    The request context is merged into ``custom_dimensions`` of each call;
    dimensions passed by the caller win on key clashes. The underlying
    logger is never modified, so concurrent requests keep their own ids.
    """

    def process(self, msg, kwargs):
        extra = dict(kwargs.get('extra') or {})
        custom_dims = dict(self.extra)
        custom_dims.update(extra.get('custom_dimensions') or {})
        extra['custom_dimensions'] = custom_dims
        kwargs['extra'] = extra
        return msg, kwargs


# ============================================================================
# COMPONENT CONFIGURATION
# ============================================================================

@dataclass
class ComponentConfig:
    """
    Per-component logging settings.
    """
    component_type: ComponentType
    log_level: LogLevel = LogLevel.INFO
    max_message_length: int = 1000


def _default_level() -> LogLevel:
    """DEBUG when DEBUG_LOGGING=true, INFO otherwise."""
    if os.getenv('DEBUG_LOGGING', '').lower() == 'true':
        return LogLevel.DEBUG
    return LogLevel.INFO



# ============================================================================
# JSON FORMATTER
# ============================================================================

class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging in Azure Functions.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as a single JSON line.

        Args:
            record: Python LogRecord to format

        Returns:
            JSON string with structured log data
        """
        log_obj = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name,
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if hasattr(record, 'custom_dimensions'):
            log_obj['customDimensions'] = record.custom_dimensions

        if record.exc_info:
            log_obj['exception'] = {
                'type': record.exc_info[0].__name__ if record.exc_info[0] else None,
                'message': str(record.exc_info[1]) if record.exc_info[1] else None,
                'traceback': self.formatException(record.exc_info)
            }

        return json.dumps(log_obj, default=str)


# ============================================================================
# LOGGER FACTORY
# ============================================================================

class LoggerFactory:
    """
    Factory for component-specific loggers.

    Example:
        logger = LoggerFactory.create_logger(
            ComponentType.SERVICE,
            "GeoJSONLayerService"
        )
        logger.info("Assembling layer")
    """

    _configured: Dict[str, logging.Logger] = {}
    _lock = threading.Lock()

    @classmethod
    def default_config(cls, component_type: ComponentType) -> ComponentConfig:
        """
        Default configuration for a component type.

        Repositories always log at DEBUG so SQL activity is traceable.
        """
        if component_type == ComponentType.REPOSITORY:
            return ComponentConfig(component_type=component_type, log_level=LogLevel.DEBUG)
        return ComponentConfig(component_type=component_type, log_level=_default_level())

    @classmethod
    def create_logger(
        cls,
        component_type: ComponentType,
        name: str,
        config: Optional[ComponentConfig] = None
    ) -> logging.Logger:
        """
        Create (or reuse) the logger for a specific component.

        Loggers are configured once per component. A later call without
        ``config`` returns the already configured logger untouched.

        Args:
            component_type: Type of component
            name: Component name (e.g., "GeoJSONLayerService")
            config: Optional custom configuration, reapplied when given

        Returns:
            Configured Python logger
        """
        logger_name = f"{component_type.value}.{name}"

        with cls._lock:
            if config is None and logger_name in cls._configured:
                return cls._configured[logger_name]

            if config is None:
                config = cls.default_config(component_type)

            logger = logging.getLogger(logger_name)

            if isinstance(config.log_level, str):
                log_level = LogLevel.from_string(config.log_level).to_python_level()
            else:
                log_level = config.log_level.to_python_level()
            logger.setLevel(log_level)

            # Replace handlers so reconfiguring does not duplicate output
            logger.handlers.clear()

            handler = logging.StreamHandler(sys.stdout)
            handler.setLevel(log_level)
            handler.setFormatter(JSONFormatter())
            logger.addHandler(handler)

            # Azure's root logger forwards to Application Insights
            logger.propagate = True

            max_length = config.max_message_length
            # Bind the unwrapped method so reconfiguring does not nest wrappers
            original_log = partial(logging.Logger._log, logger)

            def log_with_context(level, msg, args, exc_info=None, extra=None, stack_info=False, stacklevel=1):
                """Inject component fields as custom dimensions."""
                extra = dict(extra) if extra else {}

                custom_dims = {
                    'component_type': component_type.value,
                    'component_name': name
                }
                custom_dims.update(extra.get('custom_dimensions') or {})
                extra['custom_dimensions'] = custom_dims

                if isinstance(msg, str) and len(msg) > max_length:
                    msg = msg[:max_length] + '...'

                # One extra frame for this wrapper
                original_log(level, msg, args, exc_info=exc_info, extra=extra,
                             stack_info=stack_info, stacklevel=stacklevel + 1)

            logger._log = log_with_context
            cls._configured[logger_name] = logger

            return logger

    @classmethod
    def create_with_context(
        cls,
        component_type: ComponentType,
        name: str,
        request_id: Optional[str] = None,
        layer: Optional[str] = None
    ) -> ContextLoggerAdapter:
        """
        Wrap the component logger with per-request context.

        The adapter is cheap and request-local; the shared component
        logger is not modified.

        Args:
            component_type: Type of component
            name: Component name
            request_id: Optional invocation id
            layer: Optional map layer name

        Returns:
            ContextLoggerAdapter over the component logger
        """
        context = LogContext(request_id=request_id, layer=layer)
        return ContextLoggerAdapter(
            cls.create_logger(component_type, name),
            context.to_dict()
        )

"""
Config Loader

Parses the JSON sources (knowledge, context catalog, customer data) into the
in-memory structures the router consumes.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Union

from pydantic import TypeAdapter, ValidationError

from app.ai_core.context import ContextCatalog, CustomerContextStore, demo_customer_store
from app.ai_core.knowledge import KnowledgeIndex
from app.config import Settings
from app.models.context import ContextCatalogConfig
from app.models.knowledge import KnowledgeEntry

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_knowledge_adapter = TypeAdapter(List[KnowledgeEntry])
_customer_data_adapter = TypeAdapter(Dict[str, Dict[str, str]])


class ConfigLoadError(Exception):
    """
    Raised when a config source is missing, is not valid JSON or does not
    match the expected structure.
    """

    pass


def _read_json(path: PathLike, kind: str):
    file_path = Path(path)
    if not file_path.is_file():
        raise ConfigLoadError(f"{kind} file not found: {file_path}")
    try:
        with file_path.open(encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigLoadError(f"Failed to read {kind} from {file_path}: {str(e)}") from e


def load_knowledge(path: PathLike) -> KnowledgeIndex:
    """
    Load knowledge from a JSON array of
    {category?, issue?, customer_query, agent_response} records.
    """
    raw = _read_json(path, "Knowledge")
    if raw is None:
        raw = []
    try:
        entries = _knowledge_adapter.validate_python(raw)
    except ValidationError as e:
        raise ConfigLoadError(f"Invalid knowledge file {path}: {str(e)}") from e

    index = KnowledgeIndex(entries)
    logger.info(
        f"Loaded {len(index)} knowledge entries in {len(index.categories())} categories from {path}"
    )
    return index


def load_context_catalog(path: PathLike) -> ContextCatalog:
    """Load the context catalog from a JSON object {"contexts": [...]}."""
    raw = _read_json(path, "Context catalog")
    if raw is None:
        raw = {}
    try:
        config = ContextCatalogConfig.model_validate(raw)
        catalog = ContextCatalog(config.contexts)
    except (ValidationError, ValueError) as e:
        raise ConfigLoadError(f"Invalid context catalog file {path}: {str(e)}") from e

    logger.info(f"Loaded {len(catalog)} contexts from {path}: {', '.join(catalog.names())}")
    return catalog


def load_customer_data(path: PathLike) -> CustomerContextStore:
    """Load customer data from a JSON object context -> field -> value."""
    raw = _read_json(path, "Customer data")
    try:
        data = _customer_data_adapter.validate_python(raw or {})
    except ValidationError as e:
        raise ConfigLoadError(f"Invalid customer data file {path}: {str(e)}") from e

    store = CustomerContextStore(data)
    logger.info(f"Loaded customer data for {len(store.context_names())} contexts from {path}")
    return store


def load_customer_data_or_demo(settings: Settings) -> CustomerContextStore:
    if settings.customer_data_path:
        return load_customer_data(settings.customer_data_path)
    logger.info("No customer data file configured, using demo customer data")
    return demo_customer_store()

"""Neo4j access layer: query execution, node creation and driver lifecycle."""

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from neo4j import GraphDatabase
from neo4j.exceptions import AuthError, DriverError, Neo4jError, ServiceUnavailable
from opentelemetry import trace

from .config import get_settings
from .exceptions import Neo4jQueryError, Neo4jRuntimeError
from .models import NodeHandle
from .utils import quote_identifier

log = logging.getLogger(__name__)
_tracer = trace.get_tracer(__name__)


class Neo4jAl:
    """Access layer bound to a session or transaction.

    Anything exposing ``run(query, parameters)`` works as the runner: a
    driver ``Session``, an explicit ``Transaction`` or the managed
    transaction handed to ``execute_read``/``execute_write`` callbacks.
    The runner's lifecycle belongs to the caller.
    """

    def __init__(self, runner: Any, temp_id_property: str | None = None):
        self._runner = runner
        self.temp_id_property = temp_id_property or get_settings().temp_id_property

    def execute_query(self, query: str, parameters: dict | None = None):
        """Run a query and return the driver result cursor."""
        with _tracer.start_as_current_span("neo4j.execute_query") as span:
            span.set_attribute("db.system", "neo4j")
            span.set_attribute("db.statement", query)
            try:
                return self._runner.run(query, parameters or {})
            except (Neo4jError, DriverError) as e:
                raise Neo4jQueryError("Failed to execute the request.", e, "AL_EXEC", query=query)

    def _run_and_consume(self, query: str, parameters: dict) -> None:
        """Run a write query to completion.

        Server errors such as constraint violations can surface only once the
        result is consumed, so consumption is wrapped as well.
        """
        result = self.execute_query(query, parameters)
        try:
            result.consume()
        except (Neo4jError, DriverError) as e:
            raise Neo4jQueryError("Failed to execute the request.", e, "AL_EXEC", query=query)

    def create_node(self) -> NodeHandle:
        """Create an empty node and return a handle to it."""
        query = "CREATE (n) RETURN n AS node"
        try:
            record = next(iter(self.execute_query(query)), None)
        except (Neo4jQueryError, Neo4jError, DriverError) as e:
            raise Neo4jRuntimeError("Failed to create a new node.", e, "AL_CREATE_NODE")
        if record is None:
            raise Neo4jRuntimeError("Node creation returned no row.", code="AL_CREATE_NODE")
        return NodeHandle.from_entity(self, record["node"])

    def add_label(self, element_id: str, label: str) -> None:
        query = f"MATCH (n) WHERE elementId(n) = $id SET n:{quote_identifier(label)}"
        self._run_and_consume(query, {"id": element_id})

    def set_property(self, element_id: str, key: str, value: Any) -> None:
        query = "MATCH (n) WHERE elementId(n) = $id SET n += $props"
        self._run_and_consume(query, {"id": element_id, "props": {key: value}})

    def set_relationship_property(self, element_id: str, key: str, value: Any) -> None:
        query = "MATCH ()-[r]->() WHERE elementId(r) = $id SET r += $props"
        self._run_and_consume(query, {"id": element_id, "props": {key: value}})

    def error(self, message: str, cause: BaseException | None = None) -> None:
        """Diagnostic sink for failures."""
        log.error(message, exc_info=cause)


class GraphConnection:
    """Driver lifecycle around a Neo4j database."""

    def __init__(
        self,
        uri: str | None = None,
        user: str | None = None,
        password: str | None = None,
        database: str | None = None,
    ):
        """Initialize connection parameters from config or args."""
        settings = get_settings()
        self.uri = uri or settings.uri
        self.user = user or settings.user
        self.password = password or settings.password
        self.database = database or settings.database
        self.temp_id_property = settings.temp_id_property
        self._driver = None

    def __enter__(self) -> "GraphConnection":
        """Context manager entry - connect to Neo4j."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - close connection."""
        self.close()

    def connect(self) -> None:
        """Establish Neo4j connection."""
        try:
            self._driver = GraphDatabase.driver(
                self.uri,
                auth=(self.user, self.password),
            )
            # Verify connection
            self._driver.verify_connectivity()
            log.debug(f"Connected to Neo4j at {self.uri}")
        except (ServiceUnavailable, AuthError) as e:
            raise Neo4jRuntimeError(f"Failed to connect to Neo4j at {self.uri}.", e, "CONNECT")

    def close(self) -> None:
        """Close Neo4j connection."""
        if self._driver:
            self._driver.close()
            self._driver = None
            log.debug("Closed Neo4j connection")

    def health_check(self) -> bool:
        """Check if Neo4j is reachable."""
        try:
            if not self._driver:
                return False
            self._driver.verify_connectivity()
            return True
        except Exception:
            return False

    @contextmanager
    def transaction(self) -> Iterator[Neo4jAl]:
        """Yield an access layer bound to a fresh transaction.

        Commits when the block completes, rolls back when it raises.
        """
        if not self._driver:
            raise Neo4jRuntimeError("No open connection.", code="NO_DRIVER")

        with self._driver.session(database=self.database) as session:
            tx = session.begin_transaction()
            try:
                yield Neo4jAl(tx, self.temp_id_property)
            except BaseException:
                tx.rollback()
                raise
            else:
                try:
                    tx.commit()
                except (Neo4jError, DriverError) as e:
                    raise Neo4jRuntimeError("Failed to commit the transaction.", e, "COMMIT")
            finally:
                tx.close()

from strawberry.extensions import SchemaExtension

from app.core.logging import clear_operation_name, set_operation_name


class OperationNameLogging(SchemaExtension):
    """Bind the GraphQL operation name to log records emitted while it executes."""

    def on_execute(self):
        token = set_operation_name(self.execution_context.operation_name or "anonymous")
        try:
            yield
        finally:
            clear_operation_name(token)

"""Controllers for the permission-gated workspace actions."""

from movemax.app.controllers.dispatch_controller import DispatchController
from movemax.app.controllers.field_controller import FieldController
from movemax.app.controllers.project_controller import ProjectController

__all__ = ["DispatchController", "FieldController", "ProjectController"]

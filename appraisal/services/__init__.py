"""Workflow services and their side-effect emitters."""

from .cl_workflow import CLWorkflowManager, get_cl_workflow_manager
from .idp_workflow import IDPWorkflowManager, get_idp_workflow_manager
from .notification_service import NotificationService, get_notification_service

__all__ = [
    "CLWorkflowManager",
    "get_cl_workflow_manager",
    "IDPWorkflowManager",
    "get_idp_workflow_manager",
    "NotificationService",
    "get_notification_service",
]

"""Entity-change and failure alert headers.

Clients read these headers to show a toast after a create, update or delete.
When translation is enabled the alert carries a message key such as
``reportsApp.report.created`` that the client resolves; otherwise it carries
a plain English sentence.
"""
from urllib.parse import quote


def create_alert(application_name: str, message: str, param: str) -> dict[str, str]:
    return {
        f"X-{application_name}-alert": message,
        f"X-{application_name}-params": quote(param, safe=""),
    }


def create_entity_creation_alert(
    application_name: str, enable_translation: bool, entity_name: str, param: str
) -> dict[str, str]:
    if enable_translation:
        message = f"{application_name}.{entity_name}.created"
    else:
        message = f"A new {entity_name} is created with identifier {param}"
    return create_alert(application_name, message, param)


def create_entity_update_alert(
    application_name: str, enable_translation: bool, entity_name: str, param: str
) -> dict[str, str]:
    if enable_translation:
        message = f"{application_name}.{entity_name}.updated"
    else:
        message = f"A {entity_name} is updated with identifier {param}"
    return create_alert(application_name, message, param)


def create_entity_deletion_alert(
    application_name: str, enable_translation: bool, entity_name: str, param: str
) -> dict[str, str]:
    if enable_translation:
        message = f"{application_name}.{entity_name}.deleted"
    else:
        message = f"A {entity_name} is deleted with identifier {param}"
    return create_alert(application_name, message, param)


def create_failure_alert(
    application_name: str,
    enable_translation: bool,
    entity_name: str,
    error_key: str,
    default_message: str,
) -> dict[str, str]:
    message = f"error.{error_key}" if enable_translation else default_message
    return {
        f"X-{application_name}-error": message,
        f"X-{application_name}-params": entity_name,
    }

# lambda_handler.py
from utils.logging_config import setup_logging

# Initialize logging first
logger = setup_logging()

from compliance.tag_checker import check_expected_tags, check_tag_compliance
from reporting.report_builder import build_report, summarize_instance
from resources.registry import get_resource
from utils.aws_connection import AWSConnection

DEFAULT_RESOURCE = "aws_ec2_instance"


def _safe_inspect(name, func, errors):
    """Execute one inspection step with error handling."""
    try:
        logger.info(f"Starting {name}")
        result = func()
        logger.info(f"Completed {name}")
        return result
    except Exception as exc:
        logger.error(f"Error in {name}: {exc}", exc_info=True)
        errors.append({"stage": name, "error": str(exc), "type": type(exc).__name__})
        return None


def _check_instance(instance, event):
    """Evaluate the event's expectations against one existing instance."""
    violations = []

    expected_state = event.get("expected_state")
    if expected_state and instance.state != expected_state:
        violations.append({
            "resource_id": instance.id,
            "check": "state",
            "detail": f"expected {expected_state}, got {instance.state}",
        })

    if event.get("require_roles") and not instance.has_roles():
        violations.append({
            "resource_id": instance.id,
            "check": "roles",
            "detail": "no IAM role attached",
        })

    mismatched = check_expected_tags(instance, event.get("expected_tags"))
    if mismatched:
        violations.append({
            "resource_id": instance.id,
            "check": "expected_tags",
            "detail": mismatched,
        })

    return violations


def _inspect(instance, event):
    summary = summarize_instance(instance)
    violations = _check_instance(instance, event) if summary["exists"] else []
    return summary, violations


def handler(event, context):
    """Main Lambda handler for the EC2 instance inspector."""
    logger.info("EC2 instance inspection started")
    logger.info(f"Event: {event}")

    resource_class = get_resource(event.get("resource", DEFAULT_RESOURCE))
    selectors = event.get("instances", [])
    conn = AWSConnection(region=event.get("region"))

    inspected = []
    summaries = []
    violations = []
    errors = []

    for selector in selectors:
        instance = resource_class(selector, conn)
        result = _safe_inspect(
            f"inspect {instance}", lambda: _inspect(instance, event), errors
        )
        if result is None:
            continue

        summary, instance_violations = result
        summaries.append(summary)
        violations += instance_violations
        if summary["exists"]:
            inspected.append(instance)

    missing = [s for s in summaries if not s["exists"]]
    logger.info(f"Inspected {len(summaries)} instances, {len(missing)} not found")

    try:
        for v in check_tag_compliance(inspected):
            violations.append({
                "resource_id": v["resource_id"],
                "check": "required_tags",
                "detail": f"missing {v['missing_tags']}",
            })
    except Exception as e:
        logger.error(f"Error checking tag compliance: {e}", exc_info=True)
        errors.append({"stage": "tag_compliance", "error": str(e), "type": type(e).__name__})

    try:
        report = build_report(summaries, violations, errors)
    except Exception as e:
        logger.error(f"Error building report: {e}", exc_info=True)
        report = f"Error building report: {e}"

    result = {
        "status": "ok" if not errors else "partial",
        "instances": len(summaries),
        "missing": len(missing),
        "violations": len(violations),
        "errors": len(errors),
        "report": report,
    }

    logger.info(
        f"EC2 instance inspection completed: status={result['status']}, "
        f"violations={result['violations']}, errors={result['errors']}"
    )
    return result

# compliance/tag_checker.py
import logging
import os

logger = logging.getLogger(__name__)

# Default required tags (can be overridden via env var)
DEFAULT_REQUIRED_TAGS = ["Name", "owner", "env"]


def _get_required_tags():
    """Get required tags from environment or use defaults."""
    # Check if env var exists (distinguish between unset and empty string)
    if "REQUIRED_TAGS" in os.environ:
        tags_env = os.environ["REQUIRED_TAGS"]
        tags = [t.strip() for t in tags_env.split(",") if t.strip()]
        logger.info(f"Using required tags from env: {tags}")
        return tags
    return DEFAULT_REQUIRED_TAGS


def check_tag_compliance(instances):
    """Check inspected instances for required tag keys.

    Instances that could not be found are skipped; they are reported as
    missing by the caller instead.
    """
    required_tags = _get_required_tags()
    violations = []

    logger.info(f"Checking {len(instances)} instances for tag compliance")
    logger.info(f"Required tags: {required_tags}")

    for instance in instances:
        if not instance.exists():
            logger.debug(f"Skipping tag check for missing {instance}")
            continue

        present = set(instance.tags.keys())
        missing = [t for t in required_tags if t not in present]

        if missing:
            violations.append({
                "resource_id": instance.id,
                "type": "EC2",
                "missing_tags": missing,
                "tags": instance.tags.to_dict(),
            })

    logger.info(f"Found {len(violations)} tag compliance violations")
    return violations


def check_expected_tags(instance, expected):
    """Return the expected ``{key: value}`` pairs the instance does not carry."""
    mismatched = {
        key: value
        for key, value in (expected or {}).items()
        if not instance.has_tag({key: value})
    }
    if mismatched:
        logger.info(f"{instance} is missing expected tags: {mismatched}")
    return mismatched

from jinja2 import Template

from resources.attributes import INSTANCE_ATTRIBUTES


def summarize_instance(instance):
    """Collect everything the report shows about one inspected instance."""
    if not instance.exists():
        return {"display": str(instance), "id": instance.id, "exists": False}

    summary = {
        "display": str(instance),
        "id": instance.id,
        "exists": True,
        "state": instance.state,
        "has_roles": instance.has_roles(),
        "security_groups": instance.security_groups,
        "tags": instance.tags.to_dict(),
    }
    for attribute in INSTANCE_ATTRIBUTES:
        summary[attribute] = getattr(instance, attribute)
    return summary


def build_report(summaries, violations, errors=None):
    errors = errors or []
    template = Template("""
# EC2 Instance Inspection Report

## Instances
{% for s in summaries %}
{% if s.exists %}
- **{{ s.display }}** ({{ s.id }}): {{ s.state }}, {{ s.instance_type }} in {{ s.vpc_id }}/{{ s.subnet_id }}, roles: {{ "yes" if s.has_roles else "no" }}
{% else %}
- **{{ s.display }}**: not found
{% endif %}
{% endfor %}
{% if summaries|length == 0 %}
- None inspected
{% endif %}

## Violations
{% for v in violations %}
- **{{ v.resource_id }}** {{ v.check }}: {{ v.detail }}
{% endfor %}
{% if violations|length == 0 %}
- None detected
{% endif %}

## Inspection Errors
{% for e in errors %}
- Failure in {{ e.stage }}: {{ e.error }}
{% endfor %}
{% if errors|length == 0 %}
- None
{% endif %}
""")

    return template.render(
        summaries=summaries,
        violations=violations,
        errors=errors,
    )

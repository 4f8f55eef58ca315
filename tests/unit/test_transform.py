from __future__ import annotations

from alertdefs.api.models import AlertDefinition
from alertdefs.transform import (
    EXCLUDED_CONTEXT_FIELDS,
    EXCLUDED_FIELDS,
    portable,
    strip_domain_prefix,
)
from tests.alert_fixtures import build_definition


def _defs(*raw: dict[str, object]) -> list[AlertDefinition]:
    return [AlertDefinition.model_validate(item) for item in raw]


def test_portable_drops_every_server_owned_field() -> None:
    (copy,) = portable(_defs(build_definition(1)), "acme")
    payload = copy.to_payload()

    assert EXCLUDED_FIELDS.isdisjoint(payload)
    assert "alertCorrelationContext" not in payload
    assert payload["actionPolicyId"] == []
    assert copy.id is None


def test_portable_keeps_definition_content() -> None:
    (copy,) = portable(_defs(build_definition(1, "CPU high")), "acme")
    payload = copy.to_payload()

    assert payload["name"] == "CPU high"
    assert payload["severity"] == "HIGH"
    assert payload["conditions"] == [{"metric": "cpu", "operator": ">", "threshold": 90}]


def test_portable_adds_empty_action_policy_when_absent() -> None:
    (copy,) = portable(_defs({"name": "minimal"}), "acme")

    assert copy.to_payload() == {"name": "minimal", "actionPolicyId": []}


def test_portable_keeps_non_identifying_context_fields() -> None:
    raw = build_definition(
        1,
        alertCorrelationContext={
            "id": 5,
            "nameId": "corr.alerts.acme.cpu",
            "ownerEmail": "x@y.test",
            "groupBy": ["host"],
        },
    )

    (copy,) = portable(_defs(raw), "acme")
    context = copy.to_payload()["alertCorrelationContext"]

    assert context == {"groupBy": ["host"]}
    assert EXCLUDED_CONTEXT_FIELDS.isdisjoint(context)


def test_portable_strips_source_domain_prefix() -> None:
    (copy,) = portable(_defs(build_definition(1, subcategory="lib.my.acme.web.latency")), "acme")

    assert copy.subcategory == "web.latency"


def test_portable_leaves_other_domains_prefix() -> None:
    (copy,) = portable(_defs(build_definition(1, subcategory="lib.my.globex.web")), "acme")

    assert copy.subcategory == "lib.my.globex.web"


def test_strip_domain_prefix_requires_whole_segment() -> None:
    assert strip_domain_prefix("lib.my.acmecorp.web", "acme") == "lib.my.acmecorp.web"
    assert strip_domain_prefix("infra.hosts", "acme") == "infra.hosts"


def test_portable_is_stable_on_portable_input() -> None:
    once = portable(
        _defs(
            build_definition(1, subcategory="lib.my.acme.web"),
            build_definition(2, "Disk", subcategory="infra.disk"),
        ),
        "acme",
    )
    twice = portable(once, "acme")

    assert [d.to_payload() for d in twice] == [d.to_payload() for d in once]


def test_portable_preserves_order_and_does_not_mutate_input() -> None:
    source = _defs(build_definition(1, "first"), build_definition(2, "second"))

    copies = portable(source, "acme")

    assert [d.name for d in copies] == ["first", "second"]
    assert source[0].id == 1
    assert source[0].action_policy_id == ["policy-1", "policy-2"]

"""Shared fixtures for ImpactIQ tests."""

import pytest

from impactiq.models import ProcessImpact, ProcessNode, StakeholderRACI


def make_impact(
    process_id: str = "p1",
    code: str | None = None,
    level: int | None = 1,
    department: str | None = None,
    **fields: object,
) -> ProcessImpact:
    """Build a ProcessImpact with a joined hierarchy row.

    Pass level=None for an impact without hierarchy data.
    """
    node = None
    if level is not None:
        node = ProcessNode(
            id=process_id,
            process_code=code or process_id.upper(),
            process_name=f"Process {code or process_id.upper()}",
            level_number=level,
            department=department,
        )
    return ProcessImpact(process_id=process_id, process=node, **fields)


@pytest.fixture
def impact_factory():
    """Factory for ProcessImpact records (see make_impact)."""
    return make_impact


# ---------------------------------------------------------------------------
# Process impact fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def unrated_impact() -> ProcessImpact:
    """Process with no ratings and no RACI text."""
    return make_impact("p0", code="0.1")


@pytest.fixture
def payables_impact() -> ProcessImpact:
    """Supplier invoice entry: 6/15 points, new Informed role, R reassigned."""
    return make_impact(
        "p1",
        code="1.1",
        department="Finance",
        process_rating=2,
        role_rating=2,
        new_role_rating=0,
        workload_rating=1,
        system_complexity_rating=1,
        as_is_system="Legacy AP",
        to_be_system="S/4HANA",
        as_is_raci_r="AP Clerk",
        to_be_raci_r="Shared Services",
        as_is_raci_a="AP Lead",
        to_be_raci_a="AP Lead",
        to_be_raci_i="Controller",
    )


@pytest.fixture
def critical_impact() -> ProcessImpact:
    """Fully rated process (15/15 points), Accountable removed."""
    return make_impact(
        "p2",
        code="1.2",
        department="Finance",
        process_rating=3,
        role_rating=3,
        new_role_rating=3,
        workload_rating=3,
        system_complexity_rating=3,
        as_is_raci_a="CFO",
        as_is_raci_r="Treasury, AP Lead",
        to_be_raci_r="Treasury, AP Lead",
        training_required=True,
    )


@pytest.fixture
def procurement_impact() -> ProcessImpact:
    """Low-impact L2 procurement process, Consulted changed."""
    return make_impact(
        "p3",
        code="2.1.1",
        level=2,
        department="Procurement",
        process_rating=1,
        workload_rating=1,
        as_is_system="Ariba",
        to_be_system="Ariba",
        as_is_raci_c="Buyer",
        to_be_raci_c="Category Manager",
    )


@pytest.fixture
def portfolio(
    payables_impact: ProcessImpact,
    critical_impact: ProcessImpact,
    procurement_impact: ProcessImpact,
    unrated_impact: ProcessImpact,
) -> list[ProcessImpact]:
    """Four processes across two departments and two levels."""
    return [payables_impact, critical_impact, procurement_impact, unrated_impact]


# ---------------------------------------------------------------------------
# Hierarchy fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def finance_hierarchy() -> list[ProcessNode]:
    """Finance L0 with two L1 children and one L2 grandchild (unsorted)."""
    return [
        ProcessNode(id="n3", process_code="1.2", process_name="Payment Run", level_number=1, parent_id="n1", sort_order=2),
        ProcessNode(id="n1", process_code="1", process_name="Finance", level_number=0),
        ProcessNode(id="n4", process_code="1.1.1", process_name="Invoice Matching", level_number=2, parent_id="n2"),
        ProcessNode(id="n2", process_code="1.1", process_name="Payables", level_number=1, parent_id="n1", sort_order=1),
    ]


# ---------------------------------------------------------------------------
# Structured RACI fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def stakeholder_assignments() -> list[StakeholderRACI]:
    """Two stakeholders: clerk loses R to shared services, lead stays A."""
    return [
        StakeholderRACI(
            stakeholder_id="s1",
            stakeholder_code="AP Clerk",
            as_is_responsible=True,
            to_be_informed=True,
        ),
        StakeholderRACI(
            stakeholder_id="s2",
            stakeholder_code="AP Lead",
            as_is_accountable=True,
            to_be_accountable=True,
            to_be_responsible=True,
        ),
    ]

from decimal import Decimal

import pytest
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from appraisal.db import models, schemas
from appraisal.db.repositories import catalog as catalog_repo
from appraisal.errors import NotFoundError, ValidationError, VersionConflictError
from appraisal.services.cl_workflow import CLWorkflowManager
from appraisal.services.notification_service import NotificationService


@pytest.fixture
def manager(db):
    return CLWorkflowManager(db)


@pytest.fixture
def new_cl(manager, cl_payload):
    def _create(employee=None, **overrides):
        return manager.create(schemas.CLCreate(**cl_payload(employee, **overrides)))
    return _create


def _set_status(db, header_id, status):
    db.execute(update(models.CLHeader).where(models.CLHeader.id == header_id).values(status=status))
    db.commit()


def _edits(detail, **per_competency):
    """Build item edits keyed by competency name, e.g. Communication=(4, 50)."""
    edits = []
    for item in detail["items"]:
        if item.competency_name in per_competency:
            level, weight = per_competency[item.competency_name]
            edits.append(schemas.CLItemUpdate(id=item.id, assigned_level=level, weight=weight, justification="ok"))
    return edits


# === create ===

def test_create_preloads_items_in_mapping_order(manager, new_cl, catalog):
    cl_id = new_cl()
    detail = manager.get_by_id(cl_id)

    header = detail["header"]
    assert header.status == "DRAFT"
    assert header.has_assistant_manager is False
    assert header.version == 1
    assert header.employee_id == catalog.employee.id

    items = detail["items"]
    assert [i.competency_id for i in items] == [catalog.communication.id, catalog.problem_solving.id]
    assert [(i.mplr_level, i.assigned_level) for i in items] == [(3, 3), (5, 5)]
    for item in items:
        assert item.weight == 0
        assert item.score == Decimal("0")
        assert item.justification == ""
        assert item.pdf_path is None
    assert items[0].competency_name == "Communication"
    assert items[0].competency_description == "Clear written and verbal communication"


def test_create_for_employee_without_position_has_no_items(manager, new_cl, catalog):
    cl_id = new_cl(catalog.unplaced)
    detail = manager.get_by_id(cl_id)
    assert detail["header"].status == "DRAFT"
    assert detail["items"] == []


def test_create_for_unknown_employee_has_no_items(manager, cl_payload, catalog):
    cl_id = manager.create(schemas.CLCreate(**cl_payload(employee_id=987654)))
    detail = manager.get_by_id(cl_id)
    assert detail["header"].employee_id == 987654
    assert detail["items"] == []


def test_create_single_mapping_scenario(db, manager):
    db.add(models.Department(id=2, name="Operations"))
    db.flush()
    db.add_all([
        models.Position(id=7, title="Operator", department_id=2),
        models.Competency(id=5, code="SAF", name="Safety"),
    ])
    db.flush()
    db.add_all([
        models.PositionCompetency(position_id=7, competency_id=5, required_level=3),
        models.User(id=10, employee_id="E-010", name="Ten", email="ten@example.com", position_id=7, department_id=2),
    ])
    db.commit()

    cl_id = manager.create(schemas.CLCreate(employee_id=10, supervisor_id=20, department_id=2, cycle_id=1))
    detail = manager.get_by_id(cl_id)

    assert detail["header"].status == "DRAFT"
    assert len(detail["items"]) == 1
    item = detail["items"][0]
    assert (item.competency_id, item.mplr_level, item.assigned_level, item.weight) == (5, 3, 3, 0)
    assert item.score == Decimal("0")


def test_create_ids_are_distinct(new_cl):
    assert new_cl() != new_cl()


def test_create_rolls_back_header_when_an_item_insert_fails(db, manager, cl_payload, monkeypatch):
    # Competency 9999 does not exist, so the item insert violates its foreign key
    monkeypatch.setattr(catalog_repo, "get_position_competencies", lambda _db, _position_id: [(9999, 3)])

    with pytest.raises(IntegrityError):
        manager.create(schemas.CLCreate(**cl_payload()))

    assert db.execute(select(models.CLHeader)).first() is None
    assert db.execute(select(models.CLItem)).first() is None
    assert db.execute(select(models.Notification)).first() is None


def test_get_by_id_missing_returns_none(manager):
    assert manager.get_by_id(424242) is None
    with pytest.raises(NotFoundError):
        manager.require(424242)


# === update ===

def test_update_recomputes_score_from_new_values(manager, new_cl):
    cl_id = new_cl()
    before = manager.get_by_id(cl_id)

    after = manager.update(cl_id, _edits(before, Communication=(4, 50)))

    items = {i.competency_name: i for i in after["items"]}
    assert items["Communication"].assigned_level == 4
    assert items["Communication"].weight == 50
    assert items["Communication"].justification == "ok"
    assert items["Communication"].score == Decimal("2.00")
    # Not named in the batch, left alone
    assert items["Problem Solving"].weight == 0
    assert items["Problem Solving"].assigned_level == 5


def test_update_bumps_header_version(manager, new_cl):
    cl_id = new_cl()
    detail = manager.get_by_id(cl_id)
    assert detail["header"].version == 1

    after = manager.update(cl_id, _edits(detail, Communication=(3, 25)))
    assert after["header"].version == 2
    assert after["header"].status == "DRAFT"


def test_update_with_empty_batch_still_touches_header(manager, new_cl):
    cl_id = new_cl()
    after = manager.update(cl_id, [])
    assert after["header"].version == 2


def test_update_skips_unknown_item_ids(manager, new_cl):
    cl_id = new_cl()
    detail = manager.get_by_id(cl_id)
    edits = _edits(detail, Communication=(2, 40)) + [
        schemas.CLItemUpdate(id=999999, assigned_level=1, weight=10),
    ]

    after = manager.update(cl_id, edits)

    items = {i.competency_name: i for i in after["items"]}
    assert items["Communication"].score == Decimal("0.80")
    assert len(after["items"]) == 2


def test_update_cannot_reach_items_of_another_cl(manager, new_cl):
    first = new_cl()
    second = new_cl()
    foreign_item = manager.get_by_id(second)["items"][0]

    manager.update(first, [schemas.CLItemUpdate(id=foreign_item.id, assigned_level=1, weight=90)])

    untouched = manager.get_by_id(second)["items"][0]
    assert untouched.weight == 0
    assert untouched.assigned_level == foreign_item.mplr_level


def test_update_preserves_pdf_path_when_not_supplied(manager, new_cl):
    cl_id = new_cl()
    item_id = manager.get_by_id(cl_id)["items"][0].id

    manager.update(cl_id, [schemas.CLItemUpdate(id=item_id, assigned_level=3, weight=10, pdf_path="/evidence/a.pdf")])
    after = manager.update(cl_id, [schemas.CLItemUpdate(id=item_id, assigned_level=3, weight=20)])

    item = after["items"][0]
    assert item.pdf_path == "/evidence/a.pdf"
    assert item.weight == 20


def test_update_missing_header_raises_not_found(db, manager, new_cl):
    cl_id = new_cl()
    item_id = manager.get_by_id(cl_id)["items"][0].id

    with pytest.raises(NotFoundError):
        manager.update(cl_id + 1000, [schemas.CLItemUpdate(id=item_id, assigned_level=1, weight=100)])

    assert manager.get_by_id(cl_id)["items"][0].weight == 0


def test_strict_mode_rejects_unknown_item_and_rolls_back(manager, new_cl, enable_flag):
    enable_flag("STRICT_ITEM_MATCH")
    cl_id = new_cl()
    detail = manager.get_by_id(cl_id)
    edits = _edits(detail, Communication=(4, 60)) + [
        schemas.CLItemUpdate(id=999999, assigned_level=1, weight=10),
    ]

    with pytest.raises(NotFoundError) as exc:
        manager.update(cl_id, edits)
    assert exc.value.context["item_id"] == 999999

    after = manager.get_by_id(cl_id)
    assert after["header"].version == 1
    assert all(i.weight == 0 for i in after["items"])


def test_stale_expected_version_conflicts(manager, new_cl):
    cl_id = new_cl()
    detail = manager.get_by_id(cl_id)
    manager.update(cl_id, _edits(detail, Communication=(3, 10)), expected_version=1)

    with pytest.raises(VersionConflictError) as exc:
        manager.update(cl_id, _edits(detail, Communication=(5, 90)), expected_version=1)
    assert exc.value.retryable is True
    assert exc.value.status_code == 409

    after = manager.get_by_id(cl_id)
    assert after["header"].version == 2
    assert {i.competency_name: i.weight for i in after["items"]}["Communication"] == 10


def test_expected_version_on_missing_header_is_not_found(manager):
    with pytest.raises(NotFoundError):
        manager.update(31337, [], expected_version=1)


# === submit ===

def test_submit_sets_pending_am(manager, new_cl):
    cl_id = new_cl()
    after = manager.submit(cl_id)
    assert after["header"].status == "PENDING_AM"
    assert after["header"].version == 2


def test_submit_is_repeatable(manager, new_cl):
    cl_id = new_cl()
    manager.submit(cl_id)
    again = manager.submit(cl_id)
    assert again["header"].status == "PENDING_AM"
    assert again["header"].version == 3


def test_submit_ignores_department_assistant_manager_setting(manager, new_cl, catalog):
    # Engineering has an assistant manager; Sales does not. Both go to PENDING_AM.
    assert manager.submit(new_cl())["header"].status == "PENDING_AM"
    assert manager.submit(new_cl(catalog.outsider))["header"].status == "PENDING_AM"


def test_submit_missing_raises_not_found(manager):
    with pytest.raises(NotFoundError):
        manager.submit(999)


def test_submit_with_weight_enforcement(manager, new_cl, enable_flag):
    enable_flag("ENFORCE_WEIGHT_TOTAL")
    cl_id = new_cl()
    detail = manager.get_by_id(cl_id)

    with pytest.raises(ValidationError):
        manager.submit(cl_id)
    assert manager.get_by_id(cl_id)["header"].status == "DRAFT"

    manager.update(cl_id, _edits(detail, Communication=(3, 40), **{"Problem Solving": (5, 60)}))
    assert manager.submit(cl_id)["header"].status == "PENDING_AM"


def test_submit_with_weight_enforcement_rejects_empty_cl(manager, new_cl, catalog, enable_flag):
    enable_flag("ENFORCE_WEIGHT_TOTAL")
    cl_id = new_cl(catalog.unplaced)
    with pytest.raises(ValidationError) as exc:
        manager.submit(cl_id)
    assert exc.value.context["items"] == 0


# === side effects ===

def test_create_and_submit_notify_employee_and_record_actions(db, manager, new_cl, catalog):
    cl_id = new_cl()
    manager.submit(cl_id)

    notifications = db.execute(
        select(models.Notification).where(models.Notification.recipient_id == catalog.employee.id)
        .order_by(models.Notification.id)
    ).scalars().all()
    assert [n.event_type for n in notifications] == ["cl_created", "cl_submitted"]
    assert notifications[0].action_url == f"/cl/{cl_id}"

    actions = db.execute(select(models.RecentAction).order_by(models.RecentAction.id)).scalars().all()
    assert [a.action_type for a in actions] == ["cl_create", "cl_submit"]
    assert all(a.actor_id == catalog.supervisor.id for a in actions)
    assert all(a.cl_id == cl_id for a in actions)


def test_explicit_actor_is_recorded(db, manager, cl_payload):
    manager.create(schemas.CLCreate(**cl_payload()), actor_id=555)
    action = db.execute(select(models.RecentAction)).scalar_one()
    assert action.actor_id == 555


def test_disabled_side_effects_write_nothing(db, manager, new_cl, enable_flag):
    enable_flag("NOTIFICATIONS_ENABLED", "false")
    enable_flag("RECENT_ACTIONS_ENABLED", "false")
    manager.submit(new_cl())
    assert db.execute(select(models.Notification)).first() is None
    assert db.execute(select(models.RecentAction)).first() is None


def test_failing_notification_does_not_undo_create(db, cl_payload):
    class BrokenNotifications(NotificationService):
        def notify_cl_created(self, header):
            raise RuntimeError("notification store unavailable")

    manager = CLWorkflowManager(db, notification_service=BrokenNotifications(db))
    cl_id = manager.create(schemas.CLCreate(**cl_payload()))

    assert len(manager.get_by_id(cl_id)["items"]) == 2
    assert db.execute(select(models.Notification)).first() is None
    # The recent action still runs after the failed notification
    assert db.execute(select(models.RecentAction)).scalar_one().cl_id == cl_id


# === dashboards ===

def test_supervisor_summary_counts_department_cls(db, manager, new_cl, catalog):
    draft = new_cl()
    in_progress = new_cl()
    approved = new_cl()
    new_cl(catalog.outsider)  # other department, not counted
    _set_status(db, in_progress, "IN_PROGRESS")
    _set_status(db, approved, "APPROVED")
    assert draft

    summary = manager.get_supervisor_summary(catalog.supervisor.id)
    assert summary == {"cl_pending": 1, "cl_in_progress": 1, "cl_approved": 1}


def test_supervisor_summary_with_no_cls_is_zero(manager, catalog):
    assert manager.get_supervisor_summary(catalog.supervisor.id) == {
        "cl_pending": 0,
        "cl_in_progress": 0,
        "cl_approved": 0,
    }


def test_supervisor_pending_lists_open_cls_newest_first(db, manager, new_cl, catalog):
    older = new_cl()
    newer = new_cl()
    approved = new_cl()
    _set_status(db, approved, "APPROVED")
    manager.submit(newer)

    pending = manager.list_supervisor_pending(catalog.supervisor.id)

    assert [p["id"] for p in pending] == [newer, older]
    assert pending[0]["status"] == "PENDING_AM"
    assert pending[0]["employee_name"] == "Erin Engineer"
    assert pending[0]["employee_code"] == "E-100"
    assert pending[0]["department_name"] == "Engineering"
    assert pending[0]["position_title"] == "Engineer"


def test_preview_competencies(manager, catalog):
    preview = manager.preview_competencies(catalog.employee.id)
    assert preview["employee"]["position_title"] == "Engineer"
    assert preview["employee"]["department_name"] == "Engineering"
    assert [(c["name"], c["mplr"]) for c in preview["competencies"]] == [
        ("Communication", 3),
        ("Problem Solving", 5),
    ]
    assert preview["competencies"][0]["max_level_increment"] == 1


def test_preview_competencies_for_unplaced_employee(manager, catalog):
    preview = manager.preview_competencies(catalog.unplaced.id)
    assert preview["employee"]["position_id"] is None
    assert preview["competencies"] == []


def test_preview_competencies_unknown_employee(manager):
    with pytest.raises(NotFoundError):
        manager.preview_competencies(123456)

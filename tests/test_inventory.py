from apps.inventory.models import InventoryItem, InventoryLog
from core.constants import InventoryAction

INVENTORY_URL = "/api/inventory/"


def add_item(client, name="Nitrile Gloves", quantity=50, **extra):
    return client.post(INVENTORY_URL, {"name": name, "quantity": quantity, **extra}, format="json")


def test_add_then_restock_by_name(client_for, receptionist, branch):
    client = client_for(receptionist)

    created = add_item(client, quantity=50)
    restocked = add_item(client, name="  nitrile gloves ", quantity=25)

    assert created.status_code == 201
    assert restocked.status_code == 200
    assert restocked.data["id"] == created.data["id"]
    assert restocked.data["quantity"] == 75

    actions = list(InventoryLog.objects.filter(item_id=created.data["id"]).values_list("action", flat=True))
    assert actions == [InventoryAction.RESTOCK, InventoryAction.RESTOCK]


def test_same_name_in_other_branch_is_separate(client_for, admin, branch, second_branch):
    first = add_item(client_for(admin, branch))
    second = add_item(client_for(admin, second_branch))

    assert second.status_code == 201
    assert first.data["id"] != second.data["id"]
    assert InventoryItem.objects.get(pk=second.data["id"]).branch_id == second_branch.pk


def test_consume_decrements_stock(client_for, receptionist, branch):
    client = client_for(receptionist)
    item_id = add_item(client, quantity=10).data["id"]

    response = client.post(f"{INVENTORY_URL}{item_id}/consume/", {"quantity": 4, "reason": "Extraction"}, format="json")

    assert response.status_code == 200
    assert response.data["quantity"] == 6
    log = InventoryLog.objects.filter(item_id=item_id, action=InventoryAction.CONSUMED).get()
    assert log.quantity_change == -4
    assert log.notes == "Extraction"


def test_consume_never_goes_negative(client_for, receptionist, branch):
    client = client_for(receptionist)
    item_id = add_item(client, quantity=3).data["id"]

    response = client.post(f"{INVENTORY_URL}{item_id}/consume/", {"quantity": 5}, format="json")

    assert response.status_code == 400
    assert response.data["error"] == "bad_request"
    assert InventoryItem.objects.get(pk=item_id).quantity == 3


def test_consume_in_other_branch_is_not_found(client_for, admin, receptionist, second_branch):
    item_id = add_item(client_for(admin, second_branch)).data["id"]

    response = client_for(receptionist).post(f"{INVENTORY_URL}{item_id}/consume/", {"quantity": 1}, format="json")

    assert response.status_code == 404


def test_quantity_edit_is_logged_as_adjustment(client_for, receptionist, branch):
    client = client_for(receptionist)
    item_id = add_item(client, quantity=10).data["id"]

    response = client.patch(f"{INVENTORY_URL}{item_id}/", {"quantity": 7}, format="json")

    assert response.status_code == 200
    assert response.data["quantity"] == 7
    log = InventoryLog.objects.get(item_id=item_id, action=InventoryAction.ADJUSTMENT)
    assert log.quantity_change == -3


def test_low_stock_alerts(client_for, receptionist, branch):
    client = client_for(receptionist)
    add_item(client, name="Gauze", quantity=2, low_stock_threshold=5)
    add_item(client, name="Masks", quantity=100, low_stock_threshold=5)

    response = client.get(f"{INVENTORY_URL}alerts/")

    assert [row["name"] for row in response.data] == ["Gauze"]
    assert response.data[0]["is_low_stock"] is True


def test_logs_are_branch_scoped(client_for, admin, receptionist, branch, second_branch):
    add_item(client_for(admin, second_branch), name="Elsewhere")
    add_item(client_for(receptionist), name="Here")

    response = client_for(receptionist).get(f"{INVENTORY_URL}logs/")

    assert [row["item_name"] for row in response.data] == ["Here"]

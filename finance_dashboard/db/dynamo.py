import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.config import Config
from botocore.exceptions import ClientError

from finance_dashboard.core.config import settings
from finance_dashboard.core.exceptions import DuplicateKeyError, NotFoundError, StoreError

logger = logging.getLogger(__name__)

# Initialize DynamoDB resource; botocore retries throttling and transient errors
dynamodb = boto3.resource(
    "dynamodb",
    region_name=settings.DYNAMO_REGION,
    endpoint_url=settings.DYNAMO_ENDPOINT_URL,
    config=Config(retries={"max_attempts": settings.DYNAMO_MAX_ATTEMPTS, "mode": "standard"}),
)

# Get table references
transactions_table = dynamodb.Table(settings.DYNAMO_TRANSACTIONS_TABLE)
budgets_table = dynamodb.Table(settings.DYNAMO_BUDGETS_TABLE)

BUDGET_MONTH_INDEX = "month-index"  # GSI on budgets(month), create with the table


def _store_error(operation: str, e: ClientError) -> StoreError:
    message = e.response.get("Error", {}).get("Message", str(e))
    logger.error(f"{operation} failed: {message}")
    return StoreError(f"{operation} failed", details={"reason": message}, original_error=e)


def _is_condition_failure(e: ClientError) -> bool:
    return e.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException"


def _collect(operation, **kwargs) -> List[dict]:
    """Run a scan/query to completion, following LastEvaluatedKey pages."""
    items = []
    while True:
        response = operation(**kwargs)
        items.extend(response.get("Items", []))
        last_key = response.get("LastEvaluatedKey")
        if not last_key:
            return items
        kwargs["ExclusiveStartKey"] = last_key


def _update_expression(updates: dict) -> Dict[str, Any]:
    update_expression_parts = []
    expression_attribute_values = {}
    expression_attribute_names = {}

    for idx, (key, value) in enumerate(updates.items()):
        placeholder = f"#f{idx}"
        value_placeholder = f":v{idx}"
        update_expression_parts.append(f"{placeholder} = {value_placeholder}")
        expression_attribute_names[placeholder] = key
        expression_attribute_values[value_placeholder] = value

    return {
        "UpdateExpression": "SET " + ", ".join(update_expression_parts),
        "ExpressionAttributeNames": expression_attribute_names,
        "ExpressionAttributeValues": _convert_for_dynamo(expression_attribute_values),
    }


# Transactions

def list_transactions() -> List[dict]:
    """All transactions, newest first."""
    try:
        items = _collect(transactions_table.scan)
    except ClientError as e:
        raise _store_error("list_transactions", e)
    transactions = [_from_dynamo(item) for item in items]
    return sorted(transactions, key=lambda t: t.get("created_at", ""), reverse=True)


def get_transaction(transaction_id: str) -> Optional[dict]:
    try:
        response = transactions_table.get_item(Key={"transaction_id": transaction_id})
    except ClientError as e:
        raise _store_error("get_transaction", e)
    item = response.get("Item")
    return _from_dynamo(item) if item else None


def put_transaction(transaction_item: dict) -> dict:
    try:
        transactions_table.put_item(Item=_convert_for_dynamo(transaction_item))
    except ClientError as e:
        raise _store_error("put_transaction", e)
    return transaction_item


def update_transaction(transaction_id: str, updates: dict) -> dict:
    """Apply partial updates to a transaction and return the stored item."""
    if not updates:
        existing = get_transaction(transaction_id)
        if existing is None:
            raise NotFoundError("Transaction not found", details={"transaction_id": transaction_id})
        return existing

    try:
        response = transactions_table.update_item(
            Key={"transaction_id": transaction_id},
            ConditionExpression=Attr("transaction_id").exists(),
            ReturnValues="ALL_NEW",
            **_update_expression(updates),
        )
    except ClientError as e:
        if _is_condition_failure(e):
            raise NotFoundError("Transaction not found", details={"transaction_id": transaction_id})
        raise _store_error("update_transaction", e)
    return _from_dynamo(response.get("Attributes", {}))


def delete_transaction(transaction_id: str) -> dict:
    try:
        response = transactions_table.delete_item(
            Key={"transaction_id": transaction_id},
            ReturnValues="ALL_OLD",
        )
    except ClientError as e:
        raise _store_error("delete_transaction", e)
    if "Attributes" not in response:
        raise NotFoundError("Transaction not found", details={"transaction_id": transaction_id})
    return _from_dynamo(response["Attributes"])


# Budgets

def list_budgets(month: Optional[str] = None) -> List[dict]:
    """Budgets sorted by category, optionally limited to one "YYYY-MM" month."""
    try:
        if month:
            items = _collect(
                budgets_table.query,
                IndexName=BUDGET_MONTH_INDEX,
                KeyConditionExpression=Key("month").eq(month),
            )
        else:
            items = _collect(budgets_table.scan)
    except ClientError as e:
        raise _store_error("list_budgets", e)
    budgets = [_from_dynamo(item) for item in items]
    return sorted(budgets, key=lambda b: b.get("category", ""))


def get_budget(budget_id: str) -> Optional[dict]:
    try:
        response = budgets_table.get_item(Key={"budget_id": budget_id})
    except ClientError as e:
        raise _store_error("get_budget", e)
    item = response.get("Item")
    return _from_dynamo(item) if item else None


def _ensure_unique_budget(category: str, month: str, exclude_id: Optional[str] = None) -> None:
    for budget in list_budgets(month):
        if budget.get("category") == category and budget.get("budget_id") != exclude_id:
            raise DuplicateKeyError(
                "Budget already exists for this category and month",
                details={"category": category, "month": month},
            )


def put_budget(budget_item: dict) -> dict:
    """Insert a new budget; (category, month) must not already be taken."""
    _ensure_unique_budget(budget_item["category"], budget_item["month"])
    try:
        budgets_table.put_item(
            Item=_convert_for_dynamo(budget_item),
            ConditionExpression=Attr("budget_id").not_exists(),
        )
    except ClientError as e:
        if _is_condition_failure(e):
            raise DuplicateKeyError("Budget identifier already exists", details={"budget_id": budget_item["budget_id"]})
        raise _store_error("put_budget", e)
    return budget_item


def update_budget(budget_id: str, updates: dict) -> dict:
    existing = get_budget(budget_id)
    if existing is None:
        raise NotFoundError("Budget not found", details={"budget_id": budget_id})
    if not updates:
        return existing

    category = updates.get("category", existing["category"])
    month = updates.get("month", existing["month"])
    if category != existing["category"] or month != existing["month"]:
        _ensure_unique_budget(category, month, exclude_id=budget_id)

    try:
        response = budgets_table.update_item(
            Key={"budget_id": budget_id},
            ConditionExpression=Attr("budget_id").exists(),
            ReturnValues="ALL_NEW",
            **_update_expression(updates),
        )
    except ClientError as e:
        if _is_condition_failure(e):
            raise NotFoundError("Budget not found", details={"budget_id": budget_id})
        raise _store_error("update_budget", e)
    return _from_dynamo(response.get("Attributes", {}))


def delete_budget(budget_id: str) -> dict:
    try:
        response = budgets_table.delete_item(
            Key={"budget_id": budget_id},
            ReturnValues="ALL_OLD",
        )
    except ClientError as e:
        raise _store_error("delete_budget", e)
    if "Attributes" not in response:
        raise NotFoundError("Budget not found", details={"budget_id": budget_id})
    return _from_dynamo(response["Attributes"])


def _convert_for_dynamo(obj: Any):
    """
    Recursively convert floats to Decimal for DynamoDB compatibility.
    """
    if isinstance(obj, float):
        return Decimal(str(obj))
    if isinstance(obj, dict):
        return {k: _convert_for_dynamo(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_convert_for_dynamo(v) for v in obj]
    return obj


def _from_dynamo(obj: Any):
    """
    Recursively convert Decimal instances back to native Python numeric types.
    """
    if isinstance(obj, list):
        return [_from_dynamo(item) for item in obj]
    if isinstance(obj, dict):
        return {k: _from_dynamo(v) for k, v in obj.items()}
    if isinstance(obj, Decimal):
        if obj % 1 == 0:
            return int(obj)
        return float(obj)
    return obj

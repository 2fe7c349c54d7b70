from datetime import datetime

from spendwise.ledger import BudgetRecord, CategoryRecord, ExpenseRecord, SavingsGoalRecord


def make_exp(id, amount, when, owner_id=1, category_id=1):
    if isinstance(when, str):
        when = datetime.fromisoformat(when)
    return ExpenseRecord(id=id, owner_id=owner_id, category_id=category_id, amount=amount, date=when)


def make_cat(id, name, owner_id=None):
    return CategoryRecord(id=id, name=name, icon="", color="", owner_id=owner_id)


def make_budget(id, amount, owner_id=1, period="monthly", category_id=None, is_overall=False):
    return BudgetRecord(id=id, owner_id=owner_id, amount=amount, period=period,
                        category_id=category_id, is_overall=is_overall)


def make_goal(id, current_amount, owner_id=1, target_amount="1000.00"):
    return SavingsGoalRecord(id=id, owner_id=owner_id, name=f"goal {id}",
                             target_amount=target_amount, current_amount=current_amount)

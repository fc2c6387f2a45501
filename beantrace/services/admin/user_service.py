# beantrace/services/admin/user_service.py

from __future__ import annotations

import re
from typing import Dict, List

from flask import current_app

from beantrace.errors import Conflict, ValidationFailed
from beantrace.models.auth.user_models import (
    LoginAccount,
    User,
    UserCreateModel,
    UserUpdateModel,
)
from beantrace.security import bcrypt
from beantrace.store import store


class UserAdminService:
    """User management and the admin-only cascading deletes."""

    # -------------------------------------------------
    # USERS
    # -------------------------------------------------
    @staticmethod
    def list_users() -> List[Dict[str, str]]:
        rows = []
        for u in store["users"]:
            row = u.model_dump(mode="json")
            acct = store.account_by_id(u.id)
            row["email"] = acct.email if acct else None
            rows.append(row)
        return rows

    @staticmethod
    def create_user(payload: UserCreateModel) -> User:
        if bool(payload.email) != bool(payload.password):
            raise ValidationFailed("Email and password must be given together.")

        with store.lock:
            slug = re.sub(r"\s", "", payload.name.lower())
            user_id = f"user-{len(store['users']) + 1}-{slug}"
            if store.find("users", user_id):
                raise Conflict(f"User {user_id} already exists.")
            if payload.email and store.account_by_email(payload.email):
                raise Conflict(f"An account with email {payload.email} already exists.")

            user = User(id=user_id, name=payload.name, role=payload.role)
            store["users"].insert(0, user)
            if payload.email:
                store.accounts.append(LoginAccount(
                    id=user.id,
                    name=user.name,
                    email=payload.email,
                    role=user.role,
                    passwordHash=bcrypt.generate_password_hash(payload.password).decode("utf-8"),
                ))

        current_app.logger.info("User %s created (%s)", user.id, user.role.value)
        return user

    @staticmethod
    def update_user(user_id: str, payload: UserUpdateModel) -> User:
        with store.lock:
            user = store.require("users", user_id)
            if payload.name is not None:
                user.name = payload.name
            if payload.role is not None:
                user.role = payload.role

            acct = store.account_by_id(user_id)
            if acct:
                acct.name = user.name
                acct.role = user.role
        return user

    @staticmethod
    def delete_user(user_id: str) -> None:
        with store.lock:
            store.require("users", user_id)
            store.remove_where("users", lambda u: u.id == user_id)
            store.accounts = [a for a in store.accounts if a.id != user_id]
        current_app.logger.info("User %s deleted", user_id)

    # -------------------------------------------------
    # CASCADES
    # -------------------------------------------------
    @staticmethod
    def delete_harvest_lot(lot_id: str) -> Dict[str, int]:
        """
        Remove a harvest lot and everything milled from it:
        batches -> parchment -> green beans -> roaster inventory and roasts.
        Returns how many rows went from each collection.
        """
        with store.lock:
            store.require("harvestLots", lot_id)

            batches = store.remove_where("processingBatches", lambda b: b.harvestLotId == lot_id)
            batch_ids = {b.id for b in batches}
            parchment = store.remove_where(
                "parchmentLots", lambda p: p.processingBatchId in batch_ids or p.harvestLotId == lot_id
            )
            parchment_ids = {p.id for p in parchment}
            green = store.remove_where("greenBeanLots", lambda g: g.parchmentLotId in parchment_ids)
            green_ids = {g.id for g in green}
            inventory = store.remove_where("roasterInventory", lambda i: i.greenBeanLotId in green_ids)
            roasts = store.remove_where("roastBatches", lambda r: r.greenBeanLotId in green_ids)
            lots = store.remove_where("harvestLots", lambda h: h.id == lot_id)

        removed = {
            "harvestLots": len(lots),
            "processingBatches": len(batches),
            "parchmentLots": len(parchment),
            "greenBeanLots": len(green),
            "roasterInventory": len(inventory),
            "roastBatches": len(roasts),
        }
        current_app.logger.info("Harvest lot %s deleted with cascade %s", lot_id, removed)
        return removed

#!/usr/bin/env python3
"""
Storefront management commands

Commands:
    create-admin   Create a dashboard account in admin_users (bcrypt hashed)
    seed-catalog   Create the category hierarchy and products described by a
                   CSV through the admin API

Usage:
    storefront-manage create-admin --username admin --name "Site Admin"

    storefront-manage seed-catalog \
        --csv catalog.csv \
        --api-url http://localhost:8000 \
        --username admin \
        --password secret

CSV columns (header row required):
    category, sub_category, super_sub_category, name, description,
    key_features, image_url, catalogue_pdf_url, featured
Only `category` and `name` are required per row.
"""
import argparse
import csv
import getpass
import logging
import re
import sys
import time
from typing import Any, Dict, List, Optional

import requests

from storefront.services.errors import ConflictError

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "category", "sub_category", "super_sub_category", "name", "description",
    "key_features", "image_url", "catalogue_pdf_url", "featured",
]

# (admin route, response envelope key, response list key)
NODE_KINDS = {
    "categories": ("categories", "category", "categories"),
    "sub_categories": ("sub-categories", "subCategory", "subCategories"),
    "super_sub_categories": ("super-sub-categories", "superSubCategory", "superSubCategories"),
    "products": ("products", "product", "products"),
}


def slugify(name: str) -> str:
    """lowercase, runs of non-alphanumerics become a single '-'"""
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower())
    return slug.strip("-")


def _is_truthy(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "y")


def load_csv(file_path: str) -> List[Dict[str, str]]:
    """Load CSV file and return list of cleaned rows"""
    logger.info(f"Reading CSV file: {file_path}")
    rows = []
    with open(file_path, "r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        missing = {"category", "name"} - set(reader.fieldnames or [])
        if missing:
            raise ValueError(f"CSV is missing required columns: {', '.join(sorted(missing))}")
        for row in reader:
            rows.append({k: (row.get(k) or "").strip() for k in CSV_COLUMNS})
    logger.info(f"Loaded {len(rows)} rows from CSV")
    return rows


class StorefrontAPIClient:
    """Client for the storefront admin API, authenticated by the session cookie"""

    def __init__(self, base_url: str, session: Optional[Any] = None, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        # Anything with requests-style get/post works here
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def login(self, username: str, password: str) -> None:
        response = self.session.post(
            f"{self.base_url}/api/admin/login",
            json={"username": username, "password": password},
            timeout=self.timeout,
        )
        if response.status_code != 200:
            raise RuntimeError(f"Login failed (HTTP {response.status_code}): {response.text}")
        logger.info(f"Logged in to {self.base_url} as {username}")

    def list_slugs(self, kind: str) -> Dict[str, str]:
        """slug -> id for every existing row of a kind"""
        route, _, list_key = NODE_KINDS[kind]
        response = self.session.get(f"{self.base_url}/api/admin/{route}", timeout=self.timeout)
        if response.status_code != 200:
            raise RuntimeError(f"Listing {kind} failed (HTTP {response.status_code}): {response.text}")
        return {row["slug"]: row["id"] for row in response.json().get(list_key, [])}

    def create(self, kind: str, payload: Dict[str, Any]) -> str:
        route, envelope_key, _ = NODE_KINDS[kind]
        response = self.session.post(
            f"{self.base_url}/api/admin/{route}",
            json=payload,
            timeout=self.timeout,
        )
        if response.status_code == 409:
            raise ConflictError(f"{kind} slug '{payload.get('slug')}' already exists")
        if response.status_code != 201:
            raise RuntimeError(f"Creating {kind} '{payload.get('slug')}' failed (HTTP {response.status_code}): {response.text}")
        return response.json()[envelope_key]["id"]


class CatalogSeeder:
    """Creates taxonomy nodes on demand and reuses rows whose slug exists"""

    def __init__(self, client: StorefrontAPIClient):
        self.client = client
        self.known: Dict[str, Dict[str, str]] = {}
        self.stats = {"created": 0, "reused": 0, "products": 0, "skipped": 0, "failed": 0}

    def load_existing(self) -> None:
        for kind in NODE_KINDS:
            self.known[kind] = self.client.list_slugs(kind)
            logger.info(f"Found {len(self.known[kind])} existing {kind}")

    def ensure_node(self, kind: str, name: str, parent: Optional[Dict[str, str]] = None) -> str:
        slug = slugify(name)
        if slug in self.known[kind]:
            self.stats["reused"] += 1
            return self.known[kind][slug]

        payload = {"name": name, "slug": slug, **(parent or {})}
        try:
            node_id = self.client.create(kind, payload)
        except ConflictError:
            # Created by someone else since load_existing
            self.known[kind] = self.client.list_slugs(kind)
            return self.known[kind][slug]

        self.known[kind][slug] = node_id
        self.stats["created"] += 1
        logger.info(f"Created {kind} '{name}' ({slug})")
        return node_id

    def seed_row(self, row: Dict[str, str]) -> None:
        if not row["category"] or not row["name"]:
            logger.warning(f"Skipping row without category or name: {row}")
            self.stats["skipped"] += 1
            return

        names = [row[key] for key in ("category", "sub_category", "super_sub_category", "name") if row[key]]
        if not all(slugify(name) for name in names):
            logger.warning(f"Skipping row with a name that has no usable slug: {row}")
            self.stats["skipped"] += 1
            return

        product_slug = slugify(row["name"])
        if product_slug in self.known["products"]:
            logger.info(f"Product '{product_slug}' already exists, skipping")
            self.stats["skipped"] += 1
            return

        payload: Dict[str, Any] = {
            "name": row["name"],
            "slug": product_slug,
            "description": row["description"] or None,
            "key_features": row["key_features"] or None,
            "image_url": row["image_url"] or None,
            "catalogue_pdf_url": row["catalogue_pdf_url"] or None,
            "featured": _is_truthy(row["featured"]),
        }
        try:
            payload["category_id"] = self.ensure_node("categories", row["category"])
            if row["sub_category"]:
                payload["sub_category_id"] = self.ensure_node(
                    "sub_categories", row["sub_category"], {"category_id": payload["category_id"]}
                )
                if row["super_sub_category"]:
                    payload["super_sub_category_id"] = self.ensure_node(
                        "super_sub_categories", row["super_sub_category"],
                        {"sub_category_id": payload["sub_category_id"]}
                    )
            product_id = self.client.create("products", payload)
        except (ConflictError, RuntimeError, requests.RequestException) as e:
            logger.error(f"Failed to create product '{row['name']}': {e}")
            self.stats["failed"] += 1
            return

        self.known["products"][product_slug] = product_id
        self.stats["products"] += 1
        logger.info(f"Created product '{row['name']}'")

    def seed(self, rows: List[Dict[str, str]]) -> Dict[str, int]:
        self.load_existing()
        for row in rows:
            self.seed_row(row)
        return self.stats


def create_admin_account(db, username: str, password: str, name: str):
    from storefront.services.admin_service import AdminService
    return AdminService(db).create_admin(username=username, password=password, name=name)


def _cmd_create_admin(args) -> int:
    from storefront.db.database import SessionLocal

    password = args.password or getpass.getpass("Password: ")
    if not password:
        logger.error("Password must not be empty")
        return 1

    db = SessionLocal()
    try:
        user = create_admin_account(db, args.username, password, args.name)
    except ConflictError as e:
        logger.error(e.message)
        return 1
    finally:
        db.close()

    logger.info(f"Admin user '{user.username}' created with id {user.id}")
    return 0


def _cmd_seed_catalog(args) -> int:
    start_time = time.time()
    rows = load_csv(args.csv)
    if not rows:
        logger.error("CSV file is empty")
        return 1

    client = StorefrontAPIClient(args.api_url)
    client.login(args.username, args.password or getpass.getpass("Password: "))
    stats = CatalogSeeder(client).seed(rows)

    logger.info(
        f"Seeding finished in {time.time() - start_time:.2f}s: "
        f"{stats['products']} products created, {stats['created']} taxonomy nodes created, "
        f"{stats['reused']} reused, {stats['skipped']} skipped, {stats['failed']} failed"
    )
    return 0 if stats["failed"] == 0 else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storefront-manage",
        description="Storefront management commands",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    create_admin = subparsers.add_parser("create-admin", help="Create a dashboard admin account")
    create_admin.add_argument("--username", required=True, help="Login name")
    create_admin.add_argument("--name", required=True, help="Display name")
    create_admin.add_argument("--password", help="Password (prompted when omitted)")
    create_admin.set_defaults(func=_cmd_create_admin)

    seed = subparsers.add_parser("seed-catalog", help="Seed categories and products from a CSV")
    seed.add_argument("--csv", required=True, help="Path to the catalog CSV")
    seed.add_argument("--api-url", default="http://localhost:8000", help="Storefront service URL")
    seed.add_argument("--username", required=True, help="Admin username")
    seed.add_argument("--password", help="Admin password (prompted when omitted)")
    seed.set_defaults(func=_cmd_seed_catalog)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())

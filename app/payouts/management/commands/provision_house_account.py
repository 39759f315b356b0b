"""
Create the house wallet that receives the platform's share of payouts.

Usage:
    python manage.py provision_house_account
    python manage.py provision_house_account --account-id 6f1c...

Payouts always credit settings.PAYOUT_HOUSE_ACCOUNT_ID; a custom
--account-id only takes effect once that setting points at it.
"""

import uuid

from django.core.management.base import BaseCommand, CommandError

from payouts.constants import get_house_account_id
from payouts.models import Wallet


class Command(BaseCommand):
    help = (
        "Create the house wallet if it does not exist.\n"
        "Defaults to settings.PAYOUT_HOUSE_ACCOUNT_ID."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--account-id",
            default=None,
            help="House account UUID (overrides PAYOUT_HOUSE_ACCOUNT_ID)",
        )
        parser.add_argument(
            "--currency",
            default="usd",
            help="Wallet currency (default: usd)",
        )

    def handle(self, *args, **options):
        raw_id = options["account_id"]
        if raw_id:
            try:
                account_id = uuid.UUID(raw_id)
            except ValueError as e:
                raise CommandError(f"Invalid account id: {raw_id}") from e
        else:
            account_id = get_house_account_id()

        wallet, created = Wallet.objects.get_or_create(
            user_id=account_id,
            defaults={"is_house": True, "currency": options["currency"]},
        )

        if not created and not wallet.is_house:
            raise CommandError(
                f"Wallet for {account_id} exists but is not a house wallet"
            )

        if created:
            self.stdout.write(self.style.SUCCESS(f"Created house wallet {account_id}"))
        else:
            self.stdout.write(f"House wallet {account_id} already exists")

        if account_id != get_house_account_id():
            self.stderr.write(
                self.style.WARNING(
                    f"{account_id} differs from PAYOUT_HOUSE_ACCOUNT_ID "
                    f"({get_house_account_id()}); payouts only credit the "
                    "configured house account until the setting is updated"
                )
            )

"""
Create the house wallet for the configured house account id.

Payouts credit the house wallet on every order, so it must exist before
the first payout runs. Deployments that change PAYOUT_HOUSE_ACCOUNT_ID
afterwards should run the provision_house_account command.
"""

from django.db import migrations


def create_house_wallet(apps, schema_editor):
    """Create the house wallet if it does not exist."""
    from payouts.constants import get_house_account_id

    Wallet = apps.get_model("payouts", "Wallet")
    Wallet.objects.get_or_create(
        user_id=get_house_account_id(),
        defaults={"is_house": True},
    )


def remove_house_wallet(apps, schema_editor):
    """Remove the house wallet on migration rollback."""
    from payouts.constants import get_house_account_id

    Wallet = apps.get_model("payouts", "Wallet")
    Wallet.objects.filter(user_id=get_house_account_id(), is_house=True).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("payouts", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(create_house_wallet, remove_house_wallet),
    ]

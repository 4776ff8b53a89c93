"""Command-line front end for the ledger.

Each invocation loads the data file, performs one operation, prints the
outcome and saves the ledger again.

Examples::

    finance-hub register --name "Ada Lovelace" --dob 10 12 1990 \\
        --address "12 St James's Sq" --phone 02079460000 --pin 1234 --confirm-pin 1234 \\
        --deposit 100
    finance-hub deposit 50 --account 123456 --pin 1234
    finance-hub transfer 654321 25 --account 123456 --pin 1234
    finance-hub totals --admin-pin admin
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from finance_hub.config import FinanceHubConfig
from finance_hub.exceptions import FinanceHubError
from finance_hub.generators import ActivityGenerator, RegistrantGenerator
from finance_hub.logging import setup_logging
from finance_hub.models import Account, AccountStatus, AccountType, Balances, OperationResult
from finance_hub.operations import RegistrationRequest
from finance_hub.service import LedgerService

logger = logging.getLogger(__name__)

CUSTOMER_COMMANDS = {
    "deposit": ("deposit", "Deposit successful."),
    "withdraw": ("withdraw", "Withdrawal successful."),
    "loan": ("apply_loan", "Loan approved and disbursed successfully."),
    "repay": ("repay_loan", "Loan repayment successful."),
    "invest": ("invest", "Investment successful."),
    "divest": ("divest_investment", "Investment withdrawal successful."),
}

READ_ONLY_COMMANDS = {"show", "history", "accounts", "totals", "search"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="finance-hub",
        description="Finance Hub ledger: accounts, transfers, loans and investments",
    )
    parser.add_argument("--data-file", type=Path, default=None, help="Ledger file (default: bank_data.txt)")
    parser.add_argument("--log-level", default=None, help="Log level (default: LOG_LEVEL or INFO)")
    parser.add_argument("--log-format", choices=["standard", "json"], default=None)

    customer = argparse.ArgumentParser(add_help=False)
    customer.add_argument("--account", type=int, required=True, help="Account number")
    customer.add_argument("--pin", required=True, help="Account PIN")

    admin = argparse.ArgumentParser(add_help=False)
    admin.add_argument("--admin-pin", required=True, help="Administrator PIN")

    sub = parser.add_subparsers(dest="command", required=True)

    register = sub.add_parser("register", help="Register a new account")
    register.add_argument("--name", required=True)
    register.add_argument("--dob", nargs=3, type=int, required=True, metavar=("DD", "MM", "YYYY"))
    register.add_argument("--address", required=True)
    register.add_argument("--phone", required=True)
    register.add_argument(
        "--type",
        choices=[t.value.lower() for t in AccountType],
        default="savings",
        help="Account type (default: savings)",
    )
    register.add_argument("--deposit", default="0", help="Initial deposit")
    register.add_argument("--pin", required=True)
    register.add_argument("--confirm-pin", required=True)

    sub.add_parser("show", parents=[customer], help="Show account details")

    for name in CUSTOMER_COMMANDS:
        cmd = sub.add_parser(name, parents=[customer], help=f"{name.capitalize()} an amount")
        cmd.add_argument("amount")

    transfer = sub.add_parser("transfer", parents=[customer], help="Transfer to another account")
    transfer.add_argument("to_account", type=int)
    transfer.add_argument("amount")

    change_pin = sub.add_parser("change-pin", parents=[customer], help="Change the account PIN")
    change_pin.add_argument("--new-pin", required=True)
    change_pin.add_argument("--confirm-pin", required=True)

    history = sub.add_parser("history", help="Transaction history")
    history.add_argument("--account", type=int, required=True)
    auth = history.add_mutually_exclusive_group(required=True)
    auth.add_argument("--pin")
    auth.add_argument("--admin-pin")

    set_status = sub.add_parser("set-status", parents=[admin], help="Change an account's status")
    set_status.add_argument("account", type=int)
    set_status.add_argument("status", choices=[s.value.lower() for s in AccountStatus])

    search = sub.add_parser("search", parents=[admin], help="Show any account by number")
    search.add_argument("account", type=int)

    sub.add_parser("accounts", parents=[admin], help="List all accounts")
    sub.add_parser("totals", parents=[admin], help="Bank-wide totals")

    seed = sub.add_parser("seed", help="Register demo accounts with fake data")
    seed.add_argument("--count", type=int, default=10)
    seed.add_argument("--activity", type=int, default=0, help="Random operations to apply afterwards")
    seed.add_argument("--seed", type=int, default=None)

    return parser


def print_account(account: Account) -> None:
    print(f"Account Number: {account.account_number}")
    print(f"Holder Name: {account.holder_name}")
    print(f"Age: {account.age}")
    print(f"Address: {account.address}")
    print(f"Phone: {account.phone}")
    print(f"Account Type: {account.account_type.label}")
    print(f"Balance: {account.balance:.2f}")
    print(f"Status: {account.status.label}")
    print(f"Loan Balance: {account.loan_balance:.2f}")
    print(f"Investment Balance: {account.investment_balance:.2f}")


def print_balances(balances: Balances) -> None:
    print(f"Balance: {balances.balance:.2f}")
    print(f"Loan balance: {balances.loan_balance:.2f}")
    print(f"Investment balance: {balances.investment_balance:.2f}")


def print_history(account_number: int, transactions: list) -> None:
    print(f"--- Transaction History for Account: {account_number} ---")
    print("Date       Time  Description                       Amount  Balance After")
    print("-" * 72)
    if not transactions:
        print("No transactions found for this account.")
    for tx in transactions:
        print(
            f"{tx.timestamp:%Y-%m-%d} {tx.timestamp:%H:%M} {tx.description:<30} "
            f"{tx.amount:9.2f} {tx.balance_after:13.2f}"
        )
    print("-" * 72)


def print_accounts(accounts: list[Account]) -> None:
    if not accounts:
        print("No accounts found.")
        return
    print(f"| {'Account No':<10} | {'Holder Name':<20} | {'Type':<10} | {'Balance':>10} | "
          f"{'Loan':>10} | {'Investment':>10} | {'Status':<6} | {'Age':>3} |")
    for a in accounts:
        print(
            f"| {a.account_number:<10} | {a.holder_name[:20]:<20} | {a.account_type.label:<10} | "
            f"{a.balance:>10.2f} | {a.loan_balance:>10.2f} | {a.investment_balance:>10.2f} | "
            f"{a.status.label:<6} | {a.age:>3} |"
        )


def _fail(result: OperationResult) -> int:
    print(f"Error [{result.error_kind}]: {result.message}", file=sys.stderr)
    return 1


def _login_customer(service: LedgerService, args: argparse.Namespace) -> OperationResult:
    return service.login(args.account, args.pin)


def run_command(service: LedgerService, args: argparse.Namespace) -> int:
    """Execute one parsed command against ``service``; return the exit status."""
    command = args.command

    if command == "register":
        day, month, year = args.dob
        result = service.register(
            RegistrationRequest(
                holder_name=args.name,
                birth_day=day,
                birth_month=month,
                birth_year=year,
                address=args.address,
                phone=args.phone,
                pin=args.pin,
                confirm_pin=args.confirm_pin,
                account_type=args.type,
                initial_deposit=args.deposit,
            )
        )
        if not result.ok:
            return _fail(result)
        print("Account created successfully!")
        print_account(result.value)
        return 0

    if command == "seed":
        return seed_demo_ledger(service, args.count, args.activity, args.seed)

    if command in ("accounts", "totals", "search", "set-status"):
        login = service.login_admin(args.admin_pin)
        if not login.ok:
            return _fail(login)
        if command == "accounts":
            result = service.list_accounts()
            if result.ok:
                print_accounts(result.value)
        elif command == "search":
            result = service.find_account(args.account)
            if result.ok:
                print_account(result.value)
        elif command == "totals":
            result = service.totals()
            if result.ok:
                print(f"Total balance across all accounts: {result.value['balance']:.2f}")
                print(f"Total loans across all accounts: {result.value['loans']:.2f}")
                print(f"Total investments across all accounts: {result.value['investments']:.2f}")
        else:
            result = service.set_status(args.account, args.status)
            if result.ok:
                print("Account status updated successfully.")
                print_account(result.value)
        return 0 if result.ok else _fail(result)

    if command == "history":
        login = service.login_admin(args.admin_pin) if args.admin_pin else _login_customer(service, args)
        if not login.ok:
            return _fail(login)
        result = service.history(args.account)
        if not result.ok:
            return _fail(result)
        print_history(args.account, result.value)
        return 0

    login = _login_customer(service, args)
    if not login.ok:
        return _fail(login)

    if command == "show":
        result = service.account_details()
        if result.ok:
            print_account(result.value)
    elif command == "transfer":
        result = service.transfer(args.to_account, args.amount)
        if result.ok:
            print("Transfer successful.")
            print_balances(result.value)
    elif command == "change-pin":
        result = service.change_pin(args.pin, args.new_pin, args.confirm_pin)
        if result.ok:
            print("PIN changed successfully.")
    else:
        method, message = CUSTOMER_COMMANDS[command]
        result = getattr(service, method)(args.amount)
        if result.ok:
            print(message)
            print_balances(result.value)
    return 0 if result.ok else _fail(result)


def seed_demo_ledger(service: LedgerService, count: int, activity: int, seed: int | None) -> int:
    """Register ``count`` fake customers, then apply ``activity`` random operations."""
    registrants = RegistrantGenerator(
        seed=seed,
        min_age=service.config.ledger.min_age,
        today=service.registration.today,
    )
    created: list[Account] = []
    for request in registrants.generate_batch(count):
        result = service.register(request)
        if not result.ok:
            logger.warning("Stopped seeding after %d accounts: %s", len(created), result.message)
            break
        created.append(result.value)
    print(f"Registered {len(created)} demo accounts")

    if activity and created:
        handles = [service.session.authenticate(a.account_number, a.pin) for a in created]
        service.session.logout()
        report = ActivityGenerator(service.operations, seed=seed).run(handles, activity)
        print(f"Applied {report.succeeded} of {report.attempted} random operations")
        for kind, n in sorted(report.failed_by_kind.items()):
            print(f"  rejected {kind}: {n}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = FinanceHubConfig.from_env()
    except (FinanceHubError, ValueError) as exc:
        print(f"Error [Configuration]: {exc}", file=sys.stderr)
        return 2
    if args.data_file is not None:
        config.storage.data_file = args.data_file
    setup_logging(
        level=args.log_level or config.log_level,
        format_type=args.log_format or config.log_format,
    )

    try:
        service = LedgerService.open(config)
    except FinanceHubError as exc:
        print(f"Error [{exc.kind}]: {exc}", file=sys.stderr)
        return 2

    status = run_command(service, args)
    if args.command in READ_ONLY_COMMANDS:
        service.session.logout()
    else:
        service.close()
    return status


if __name__ == "__main__":
    sys.exit(main())

"""Utility script to run one deadline reminder scan outside the web process."""

from __future__ import annotations

import argparse
import asyncio
import logging

from sistema_os.config import get_settings
from sistema_os.container import build_container
from sistema_os.domain.errors import StoreError
from sistema_os.infrastructure.database import initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the scan."""

    parser = argparse.ArgumentParser(
        description="Create deadline reminders for open and in-progress service orders.",
    )
    parser.add_argument(
        "--user",
        action="append",
        dest="users",
        default=None,
        help="Usuário que recebe os lembretes (repetível). Padrão: todos os usuários conhecidos.",
    )
    parser.add_argument(
        "--dedupe",
        action="store_true",
        help="Ignora ordens que já receberam lembrete hoje.",
    )
    return parser.parse_args()


async def run(users: list[str] | None, dedupe: bool) -> int:
    settings = get_settings()
    if dedupe:
        settings = settings.model_copy(update={"deadline_reminder_dedupe": True})
    container = build_container(settings)
    try:
        await initialize_database(container.engine)
        if users:
            results = {user: await container.scanner.scan(user) for user in users}
        else:
            results = await container.scheduler.run_once()
    finally:
        await container.engine.dispose()

    failures = 0
    for user, result in results.items():
        if result.success:
            print(
                f"{user}: {result.created_count} lembrete(s) criado(s)"
                + (f" ({', '.join(result.order_numbers)})" if result.order_numbers else "")
            )
        else:
            failures += 1
            print(f"{user}: falha ao verificar prazos: {result.error}")
        for failure in result.errors:
            print(f"  OS #{failure.order_number}: {failure.error}")
    return failures


def main() -> None:
    """Run the scan using the provided command line arguments."""

    args = parse_args()
    logging.basicConfig(level=get_settings().log_level)
    try:
        failures = asyncio.run(run(args.users, args.dedupe))
    except StoreError as exc:
        raise SystemExit(f"Erro ao acessar o banco de dados: {exc}") from exc
    if failures:
        raise SystemExit(1)


if __name__ == "__main__":
    main()

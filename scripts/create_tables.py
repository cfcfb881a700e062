# flake8: noqa
# scripts/create_tables.py

import asyncio

import typer

from app.core.database import create_db_and_tables, engine

cli = typer.Typer()


@cli.command()
def main():
    """
    새 데이터베이스에 loos / loo_contributors 테이블을 생성합니다.
    이미 존재하는 테이블은 그대로 둡니다.
    """
    print("테이블 생성을 시작합니다...")

    async def run_creation():
        try:
            await create_db_and_tables()
        finally:
            await engine.dispose()

    asyncio.run(run_creation())
    print("테이블 생성이 완료되었습니다.")


if __name__ == "__main__":
    cli()

# flake8: noqa
# scripts/issue_token.py

from datetime import timedelta
from typing import Optional

import typer

from app.core.security import create_access_token, extract_contributor

cli = typer.Typer()


@cli.command()
def main(
    subject: str = typer.Option(
        ..., '--sub', '-s',
        prompt="토큰 subject(sub)를 입력하세요",
        help="토큰의 sub 클레임입니다. 다른 식별자가 없으면 기여자 이름으로 사용됩니다."
    ),
    nickname: Optional[str] = typer.Option(
        None, '--nickname', '-n',
        help="기여자 이력에 기록될 닉네임입니다."
    ),
    minutes: int = typer.Option(
        60, '--minutes', '-m',
        help="토큰 유효 시간(분)입니다."
    ),
):
    """
    변경 API(POST/PUT /loos) 호출에 사용할 서명된 Bearer 토큰을 발급합니다.
    SECRET_KEY 와 ALGORITHM 은 .env 설정을 사용합니다.
    """
    if minutes <= 0:
        print("오류: 유효 시간은 1분 이상이어야 합니다.")
        raise typer.Abort()

    claims = {"sub": subject}
    if nickname:
        claims["nickname"] = nickname

    token = create_access_token(claims, expires_delta=timedelta(minutes=minutes))
    print(f"기여자: {extract_contributor(claims)}")
    print(token)


if __name__ == "__main__":
    cli()

import argparse
import json
import os
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Literal

if __package__ in (None, ""):
    sys.path.append(str(Path(__file__).resolve().parent.parent))

import uvicorn
from rich.console import Console
from rich.table import Table

from app.core.compare import build_input, compare_regimes
from app.core.errors import InvalidInput, UnknownRegimeError
from app.core.models import ComparisonResult
from app.core.money import round_cents
from app.core.regimes import SUPPORTED_REGIMES, describe_regime, get_regime, list_regimes

ColorPreference = Literal["auto", "always", "never"]

EXIT_INVALID_INPUT = 2


def parse_amount(text: str) -> Decimal:
    """Parse ``5.000,00``, ``R$ 1.234,5`` or plain ``5000.00`` into a Decimal."""
    cleaned = text.strip().replace("R$", "").replace(" ", "").replace("_", "")
    if not cleaned:
        raise ValueError("Please enter a number.")
    if "," in cleaned:
        cleaned = cleaned.replace(".", "").replace(",", ".")
    try:
        return Decimal(cleaned)
    except InvalidOperation as exc:
        raise ValueError(f"Could not understand amount '{text}'.") from exc


def format_brl(value: Decimal | float) -> str:
    text = f"{round_cents(value):,.2f}"
    return "R$ " + text.replace(",", "_").replace(".", ",").replace("_", ".")


def _format_rate(value: Decimal) -> str:
    return f"{value:.1f}%".replace(".", ",")


def _resolve_color_preference(pref: ColorPreference) -> ColorPreference:
    if pref == "auto" and os.getenv("NO_COLOR"):
        return "never"
    return pref


def _get_console(pref: ColorPreference) -> Console:
    resolved = _resolve_color_preference(pref)
    if resolved == "never":
        return Console(no_color=True, highlight=False)
    return Console(force_terminal=resolved == "always" or None)


def _print_comparison(result: ComparisonResult, console: Console) -> None:
    current, projected = result.current, result.projected
    table = Table(title="Salário líquido: referência 2025 x projeção 2026")
    table.add_column("")
    table.add_column(f"Referência {current.label}", justify="right")
    table.add_column(f"Projeção {projected.label}", justify="right")
    table.add_row("Salário bruto", format_brl(result.gross), format_brl(result.gross))
    table.add_row("INSS", f"-{format_brl(current.contribution)}", f"-{format_brl(projected.contribution)}")
    table.add_row(
        f"IRRF ({_format_rate(current.tax_rate_percent)} / {_format_rate(projected.tax_rate_percent)})",
        f"-{format_brl(current.tax)}",
        f"-{format_brl(projected.tax)}",
    )
    if result.other > 0:
        table.add_row("Outros", f"-{format_brl(result.other)}", f"-{format_brl(result.other)}")
    table.add_row("Total descontos", format_brl(current.total_deductions), format_brl(projected.total_deductions))
    table.add_row("Salário líquido", format_brl(current.net), format_brl(projected.net), style="bold")
    console.print(table)
    console.print(f"Dependentes: {result.dependents}")
    if projected.reduction_applied > 0:
        rule = get_regime(projected.regime).reduction
        label = f"Redução {rule.legal_reference}" if rule is not None and rule.legal_reference else "Redução"
        console.print(f"{label}: {format_brl(projected.reduction_applied)}")
    console.print(f"Diferença no líquido: {format_brl(result.net_difference)}")


def _print_tables(view: dict[str, Any], console: Console) -> None:
    contribution = Table(title=f"INSS {view['label']} ({view['name']})")
    contribution.add_column("Faixa de salário")
    contribution.add_column("Alíquota", justify="right")
    for index, tier in enumerate(view["contribution"]["tiers"]):
        if index == 0:
            label = f"Até {format_brl(tier['upper'])}"
        else:
            label = f"De {format_brl(tier['lower'])} até {format_brl(tier['upper'])}"
        contribution.add_row(label, _format_rate(tier["rate_percent"]))
    console.print(contribution)
    console.print(f"Teto: {format_brl(view['contribution']['ceiling'])}")

    income_tax = Table(title=f"IRRF {view['label']}")
    income_tax.add_column("Base de cálculo")
    income_tax.add_column("Alíquota", justify="right")
    income_tax.add_column("Dedução", justify="right")
    for tier in view["income_tax"]["tiers"]:
        if tier["upper"] is None:
            label = f"Acima de {format_brl(tier['lower'])}"
        else:
            label = f"Até {format_brl(tier['upper'])}"
        income_tax.add_row(label, _format_rate(tier["rate_percent"]), format_brl(tier["deduction"]))
    console.print(income_tax)
    console.print(
        f"Dedução por dependente: {format_brl(view['income_tax']['dependent_deduction'])}; "
        f"desconto simplificado: {format_brl(view['income_tax']['simplified_deduction'])}"
    )
    reduction = view["reduction"]
    if reduction is not None:
        console.print(
            f"Redução ({reduction['legal_reference']}): isenção até {format_brl(reduction['exemption_limit'])}; "
            f"até {format_brl(reduction['phase_out_limit'])}: "
            f"{reduction['intercept']} - ({reduction['slope']} x rendimento)"
        )


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="salary-compare",
        description="Compare net salary under the 2025 and projected 2026 INSS/IRRF rules.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="compare",
        choices=["compare", "tables", "serve"],
        help="Action to perform.",
    )
    parser.add_argument("--gross", help="Gross monthly salary, e.g. 5.000,00 or 5000.00.")
    parser.add_argument("--dependents", type=int, default=0, help="Number of dependents.")
    parser.add_argument("--other", default="0", help="Other deductions, e.g. 150,00.")
    parser.add_argument(
        "--autonomo",
        action="store_true",
        help="Self-employed contract (no INSS withheld).",
    )
    parser.add_argument(
        "--regime",
        help=f"Only show tables for this regime ({', '.join(SUPPORTED_REGIMES)} or its year).",
    )
    parser.add_argument("--json", action="store_true", help="Print the comparison as JSON.")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address for serve.")
    parser.add_argument("--port", type=int, default=8000, help="Port for serve.")
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Color output preference (default: auto).",
    )
    parser.add_argument(
        "--no-color",
        dest="color",
        action="store_const",
        const="never",
        help="Alias for --color never.",
    )
    return parser.parse_args(argv)


def _run_compare(args: argparse.Namespace, console: Console) -> int:
    if args.gross is None:
        console.print("Missing --gross salary.")
        return EXIT_INVALID_INPUT
    try:
        in_ = build_input(
            gross_salary=parse_amount(args.gross),
            other_deductions=parse_amount(args.other),
            dependents=args.dependents,
            is_contribution_liable=not args.autonomo,
        )
    except ValueError as exc:
        console.print("There was a problem with the values provided:")
        issues = exc.issues if isinstance(exc, InvalidInput) else [{"field": "value", "message": str(exc)}]
        for issue in issues:
            console.print(f"  - {issue['field']}: {issue['message']}")
        return EXIT_INVALID_INPUT
    result = compare_regimes(in_)
    if args.json:
        print(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        _print_comparison(result, console)
    return 0


def _run_tables(args: argparse.Namespace, console: Console) -> int:
    try:
        regimes = [get_regime(args.regime)] if args.regime else list_regimes()
    except UnknownRegimeError as exc:
        console.print(str(exc))
        return EXIT_INVALID_INPUT
    views = [describe_regime(regime) for regime in regimes]
    if args.json:
        print(json.dumps(views, indent=2, default=str))
        return 0
    for view in views:
        _print_tables(view, console)
    return 0


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    console = _get_console(args.color)
    if args.command == "serve":
        uvicorn.run("app.api.http:app", host=args.host, port=args.port)
        return
    if args.command == "tables":
        status = _run_tables(args, console)
    else:
        status = _run_compare(args, console)
    if status:
        sys.exit(status)


if __name__ == "__main__":
    main()

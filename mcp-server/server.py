#!/usr/bin/env python3
"""MCP Server for the Financial Calculators.

This server exposes the SIP, EMI, income tax and retirement calculators
as MCP tools, allowing AI assistants to answer "what if" questions with
the same numbers the calculators produce.
"""

import os
import sys
import json
import asyncio
import logging
from typing import Any

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from tools import CalculatorTools

logger = logging.getLogger("finance-calculators")

# Create the MCP server
server = Server("finance-calculators")

# Global tools instance (initialized on first use)
tools: CalculatorTools | None = None


def get_tools() -> CalculatorTools:
    """Get or initialize the tools instance."""
    global tools
    if tools is None:
        # Reference tables can be swapped via FINANCE_CALCULATORS_REFERENCE_DIR
        tools = CalculatorTools(os.environ.get('FINANCE_CALCULATORS_REFERENCE_DIR'))
    return tools


NUMBER = {"type": "number"}

RATE_PARAM = {
    "type": "number",
    "description": "Annual rate in percent, e.g. 8.5 for 8.5%"
}


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available calculator tools."""
    return [
        Tool(
            name="list_loan_types",
            description="List loan types (home, personal, car, education, business) with their interest rate band, maximum tenure and defaults.",
            inputSchema={"type": "object", "properties": {}, "required": []}
        ),
        Tool(
            name="list_fund_categories",
            description="List mutual fund categories with their expected return band, plus the allowed SIP amount and period.",
            inputSchema={"type": "object", "properties": {}, "required": []}
        ),
        Tool(
            name="list_inflation_options",
            description="List the inflation presets (by year) usable in retirement projections.",
            inputSchema={"type": "object", "properties": {}, "required": []}
        ),
        Tool(
            name="reload_reference_data",
            description="Reload the loan, fund, inflation and income tax tables from disk.",
            inputSchema={"type": "object", "properties": {}, "required": []}
        ),
        Tool(
            name="calculate_sip",
            description="Estimate the maturity value of a monthly SIP (systematic investment plan) and its year-by-year growth. Installments are invested at the start of each month.",
            inputSchema={
                "type": "object",
                "properties": {
                    "monthly_amount": {**NUMBER, "description": "Monthly investment amount in rupees"},
                    "years": {"type": "integer", "description": "Investment period in years (1-30)"},
                    "annual_return_percent": RATE_PARAM,
                    "category": {"type": "string", "description": "Optional fund category name, e.g. 'Mid Cap'. The return must lie in the category's band."}
                },
                "required": []
            }
        ),
        Tool(
            name="calculate_emi",
            description="Calculate the equated monthly installment, total interest and total amount payable for a loan.",
            inputSchema={
                "type": "object",
                "properties": {
                    "loan_type": {"type": "string", "description": "Loan type key: home, personal, car, education or business (default home)"},
                    "principal": {**NUMBER, "description": "Loan amount in rupees"},
                    "annual_rate_percent": RATE_PARAM,
                    "tenure": {**NUMBER, "description": "Loan tenure"},
                    "tenure_unit": {"type": "string", "enum": ["years", "months"], "description": "Unit of tenure (default years)"}
                },
                "required": []
            }
        ),
        Tool(
            name="calculate_income_tax",
            description="Estimate income tax on an annual income: standard deduction, slab-wise tax, 4% cess and rebate. Returns take-home pay and effective tax rate.",
            inputSchema={
                "type": "object",
                "properties": {
                    "annual_income": {**NUMBER, "description": "Gross annual income in rupees"}
                },
                "required": ["annual_income"]
            }
        ),
        Tool(
            name="project_retirement",
            description="Project the retirement corpus from current savings and monthly contributions, compare it with the inflation-adjusted corpus needed for retirement, and compute the monthly contribution that closes any gap.",
            inputSchema={
                "type": "object",
                "properties": {
                    "current_age": {"type": "integer"},
                    "retirement_age": {"type": "integer"},
                    "life_expectancy": {"type": "integer"},
                    "current_savings": NUMBER,
                    "monthly_contribution": NUMBER,
                    "expected_return_percent": RATE_PARAM,
                    "inflation_option": {"type": "string", "description": "Inflation preset year ('2020'-'2024') or 'Custom'"},
                    "custom_inflation_percent": {**NUMBER, "description": "Inflation rate used when inflation_option is 'Custom'"},
                    "monthly_expense_today": {**NUMBER, "description": "Current monthly expense in rupees"}
                },
                "required": []
            }
        ),
        Tool(
            name="compare_loans",
            description="Compare the EMI and total interest of several loan types for the same principal and tenure, each at its default rate.",
            inputSchema={
                "type": "object",
                "properties": {
                    "principal": {**NUMBER, "description": "Loan amount in rupees"},
                    "tenure_years": {**NUMBER, "description": "Loan tenure in years"},
                    "loan_types": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Optional: loan type keys to compare. Defaults to all."
                    }
                },
                "required": ["principal", "tenure_years"]
            }
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        calc_tools = get_tools()
        arguments = arguments or {}

        if name == "list_loan_types":
            result = calc_tools.list_loan_types()
        elif name == "list_fund_categories":
            result = calc_tools.list_fund_categories()
        elif name == "list_inflation_options":
            result = calc_tools.list_inflation_options()
        elif name == "reload_reference_data":
            result = calc_tools.reload_reference_data()
        elif name == "calculate_sip":
            result = calc_tools.calculate_sip(
                arguments.get("monthly_amount"),
                arguments.get("years"),
                arguments.get("annual_return_percent"),
                arguments.get("category")
            )
        elif name == "calculate_emi":
            result = calc_tools.calculate_emi(
                arguments.get("loan_type", "home"),
                arguments.get("principal"),
                arguments.get("annual_rate_percent"),
                arguments.get("tenure"),
                arguments.get("tenure_unit", "years")
            )
        elif name == "calculate_income_tax":
            result = calc_tools.calculate_income_tax(arguments["annual_income"])
        elif name == "project_retirement":
            result = calc_tools.project_retirement(**arguments)
        elif name == "compare_loans":
            result = calc_tools.compare_loans(
                arguments["principal"],
                arguments["tenure_years"],
                arguments.get("loan_types")
            )
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(
            type="text",
            text=json.dumps(result, indent=2, default=str)
        )]
    except Exception as e:
        logger.exception("Tool %s failed", name)
        return [TextContent(
            type="text",
            text=json.dumps({"error": str(e)}, indent=2)
        )]


async def main():
    """Run the MCP server."""
    # stdout carries the protocol, so logs go to stderr
    logging.basicConfig(
        level=os.environ.get('FINANCE_CALCULATORS_LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        stream=sys.stderr
    )
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


if __name__ == "__main__":
    asyncio.run(main())

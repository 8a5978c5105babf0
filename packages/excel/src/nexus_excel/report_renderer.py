"""Bookkeeping workbook renderer (trial balance, capital locks, share register)."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Font, Border, Side, Alignment, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from nexus_domain.blocks import (
    Block,
    BlockContext,
    BlockExecutor,
    CapitalScheduleBlock,
    ShareRegisterBlock,
    TrialBalanceBlock,
)
from nexus_domain.schemas import ReportCFG

logger = logging.getLogger(__name__)

MONEY_FORMAT = '#,##0.00;[Red](#,##0.00)'
PERCENT_FORMAT = '0.00"%"'
DATE_FORMAT = 'yyyy-mm-dd'

TRIAL_BALANCE_SHEET = "Trial Balance"
CAPITAL_SHEET = "Capital Locks"
REGISTER_SHEET = "Share Register"


class NexusReportRenderer:
    """Render the bookkeeping report workbook from a ReportCFG."""

    HEADER_ROW = 3

    def __init__(self, config: ReportCFG):
        self.config = config

        self.title_font = Font(size=14, bold=True)
        self.subtitle_font = Font(italic=True, color="595959")
        self.bold_font = Font(bold=True)

        # White text on dark blue
        self.header_font = Font(bold=True, color="FFFFFF")
        self.header_fill = PatternFill(start_color="1F4E78", end_color="1F4E78", fill_type="solid")

        self.totals_fill = PatternFill(start_color="E7E6E6", end_color="E7E6E6", fill_type="solid")
        self.ok_font = Font(bold=True, color="006400")
        self.alert_font = Font(bold=True, color="C00000")

        self.thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )
        self.top_border = Border(top=Side(style='medium'))
        self.center_align = Alignment(horizontal='center', vertical='center')

    def render(self, output_path: str) -> str:
        wb = self.build_workbook()
        wb.save(output_path)
        logger.info("Saved bookkeeping report for %s to %s", self.config.company_name, output_path)
        return output_path

    def build_workbook(self) -> Workbook:
        context = self.compute()

        wb = Workbook()
        wb.remove(wb.active)

        if self.config.include_trial_balance:
            self._render_trial_balance(wb, context)
        if self.config.include_capital_locks:
            self._render_capital_locks(wb, context)
        if self.config.include_share_register:
            self._render_share_register(wb, context)

        return wb

    def compute(self) -> BlockContext:
        """Run the blocks the configured sections need."""
        context = BlockContext()
        context.set("as_of_date", self.config.as_of_date)
        context.set("ledger_entries", self.config.ledger_entries)
        context.set("capital_locks", self.config.capital_locks)
        context.set("shareholder_positions", self.config.shareholder_positions)

        blocks: List[Block] = []
        if self.config.include_trial_balance:
            blocks.append(TrialBalanceBlock(as_of_key="as_of_date"))
        if self.config.include_capital_locks:
            blocks.append(CapitalScheduleBlock(policy=self.config.policy))
        if self.config.include_share_register:
            blocks.append(ShareRegisterBlock())

        return BlockExecutor(blocks).execute(context)

    # ------------------------------------------------------------------ #
    # Sheets
    # ------------------------------------------------------------------ #

    def _render_trial_balance(self, wb: Workbook, context: BlockContext) -> None:
        df: pd.DataFrame = context.get("trial_balance")
        sheet = self._new_sheet(wb, TRIAL_BALANCE_SHEET, "Trial Balance")

        headers = ["Account Code", "Account Name", "Debit", "Credit", "Balance"]
        self._write_header(sheet, headers)

        first_row = self.HEADER_ROW + 1
        row = first_row
        for record in df.to_dict("records"):
            sheet.cell(row=row, column=1, value=record["account_code"])
            sheet.cell(row=row, column=2, value=record["account_name"])
            self._money(sheet.cell(row=row, column=3, value=record["total_debit"]))
            self._money(sheet.cell(row=row, column=4, value=record["total_credit"]))
            # Balance stays live if a debit or credit is edited
            self._money(sheet.cell(row=row, column=5, value=f"=C{row}-D{row}"))
            for col in range(1, 6):
                sheet.cell(row=row, column=col).border = self.thin_border
            row += 1

        last_row = row - 1
        totals_row = row
        sheet.cell(row=totals_row, column=2, value="Total").font = self.bold_font
        for col in (3, 4, 5):
            letter = get_column_letter(col)
            formula = f"=SUM({letter}{first_row}:{letter}{last_row})" if last_row >= first_row else 0
            cell = sheet.cell(row=totals_row, column=col, value=formula)
            self._money(cell)
            cell.font = self.bold_font
        for col in range(1, 6):
            sheet.cell(row=totals_row, column=col).fill = self.totals_fill
            sheet.cell(row=totals_row, column=col).border = self.top_border

        check_row = totals_row + 1
        sheet.cell(row=check_row, column=2, value="Check")
        sheet.cell(
            row=check_row,
            column=3,
            value=f'=IF(ABS(C{totals_row}-D{totals_row})<0.01,"BALANCED","OUT OF BALANCE")',
        )

        summary = context.get("financial_summary").iloc[0]
        status_cell = sheet.cell(
            row=check_row,
            column=5,
            value="Balanced" if summary["is_balanced"] else "Out of balance",
        )
        status_cell.font = self.ok_font if summary["is_balanced"] else self.alert_font

        self._set_widths(sheet, [14, 32, 16, 16, 16])

    def _render_capital_locks(self, wb: Workbook, context: BlockContext) -> None:
        df: pd.DataFrame = context.get("capital_schedule")
        sheet = self._new_sheet(wb, CAPITAL_SHEET, "Locked Capital")

        columns: Dict[str, str] = {
            "investor_name": "Investor",
            "currency": "Currency",
            "principal": "Principal",
            "lock_period_months": "Months",
            "lock_date": "Lock Date",
            "unlock_date": "Unlock Date",
            "total_roi_rate": "ROI %",
            "status": "Status",
            "accrued_interest": "Accrued Interest",
            "penalty_amount": "Penalty",
            "days_to_unlock": "Days to Unlock",
        }
        self._write_header(sheet, list(columns.values()))

        row = self.HEADER_ROW + 1
        for record in df.to_dict("records"):
            for col, key in enumerate(columns, start=1):
                cell = sheet.cell(row=row, column=col, value=record[key])
                cell.border = self.thin_border
                if key in ("principal", "accrued_interest", "penalty_amount"):
                    self._money(cell)
                elif key == "total_roi_rate":
                    cell.number_format = PERCENT_FORMAT
                elif key in ("lock_date", "unlock_date"):
                    cell.number_format = DATE_FORMAT
            row += 1

        # Statistics block under the schedule
        stats = context.get("capital_statistics").iloc[0]
        row += 1
        sheet.cell(row=row, column=1, value="Statistics").font = self.bold_font
        for label, key in [
            ("Total locks", "total_locks"),
            ("Investors", "total_investors"),
            ("Pending withdrawals", "pending_withdrawals"),
            ("Unlocking soon", "upcoming_unlocks"),
        ]:
            row += 1
            sheet.cell(row=row, column=1, value=label)
            sheet.cell(row=row, column=2, value=int(stats[key]))

        by_currency: pd.DataFrame = context.get("capital_by_currency")
        for record in by_currency.to_dict("records"):
            row += 1
            sheet.cell(row=row, column=1, value=f"Principal ({record['currency']})")
            self._money(sheet.cell(row=row, column=2, value=record["total_principal"]))

        self._set_widths(sheet, [24, 10, 16, 8, 12, 12, 8, 26, 16, 14, 14])

    def _render_share_register(self, wb: Workbook, context: BlockContext) -> None:
        df: pd.DataFrame = context.get("share_register")
        sheet = self._new_sheet(wb, REGISTER_SHEET, "Share Register")

        self._write_header(sheet, ["Person", "Shares Held", "Ownership %", "Status"])

        row = self.HEADER_ROW + 1
        for record in df.to_dict("records"):
            sheet.cell(row=row, column=1, value=record["person_id"])
            sheet.cell(row=row, column=2, value=int(record["shares_held"])).number_format = '#,##0'
            sheet.cell(row=row, column=3, value=record["share_percentage"]).number_format = PERCENT_FORMAT
            sheet.cell(row=row, column=4, value=record["status"])
            for col in range(1, 5):
                sheet.cell(row=row, column=col).border = self.thin_border
            row += 1

        self._set_widths(sheet, [28, 14, 14, 12])

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _new_sheet(self, wb: Workbook, title: str, heading: str) -> Worksheet:
        sheet = wb.create_sheet(title=title[:31])
        sheet.sheet_properties.pageSetUpPr.fitToPage = True
        sheet.sheet_view.showGridLines = False

        sheet["A1"] = f"{heading} - {self.config.company_name}"
        sheet["A1"].font = self.title_font
        sheet["A2"] = f"As of {self.config.as_of_date.isoformat()}"
        sheet["A2"].font = self.subtitle_font
        return sheet

    def _write_header(self, sheet: Worksheet, headers: List[str]) -> None:
        for col, header in enumerate(headers, start=1):
            cell = sheet.cell(row=self.HEADER_ROW, column=col, value=header)
            cell.font = self.header_font
            cell.fill = self.header_fill
            cell.alignment = self.center_align
            cell.border = self.thin_border
        sheet.freeze_panes = sheet.cell(row=self.HEADER_ROW + 1, column=1)

    @staticmethod
    def _money(cell) -> None:
        cell.number_format = MONEY_FORMAT

    @staticmethod
    def _set_widths(sheet: Worksheet, widths: Optional[List[int]]) -> None:
        for idx, width in enumerate(widths or [], start=1):
            sheet.column_dimensions[get_column_letter(idx)].width = width

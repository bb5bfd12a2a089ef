import json
import logging
import os
from functools import lru_cache
from typing import Optional

from model.TaxBreakdown import TaxBreakdown, TaxSlab

logger = logging.getLogger(__name__)

DEFAULT_REFERENCE_PATH = os.path.join(os.path.dirname(__file__), '../../reference/income-tax.json')


def _normalize_rate(rate: float) -> float:
	# Rates above 1 are written as percentages in the reference file
	if rate > 1:
		return rate / 100.0
	return rate


class IncomeTaxDetails:
	def __init__(self, policy: Optional[dict] = None, ref_path: Optional[str] = None):
		"""
		policy: a dict in the reference/income-tax.json layout. When omitted the
		        policy is read from ref_path (default reference/income-tax.json).
		"""
		if policy is None:
			policy = self._load_policy(ref_path or DEFAULT_REFERENCE_PATH)
		self.regime = policy.get("regime", "")
		self.standard_deduction = policy.get("standardDeduction", 0)
		self.max_income = policy.get("maxIncome")
		self.cess_rate = _normalize_rate(policy.get("cessRate", 0))
		rebate = policy.get("rebate", {})
		self.rebate_threshold = rebate.get("threshold", 0)
		self.rebate_cap = rebate.get("cap", 0)
		self.slabs = self._build_slabs(policy.get("slabs", []))

	@staticmethod
	def _load_policy(ref_path: str) -> dict:
		ref_path = os.path.normpath(ref_path)
		logger.debug("Loading income tax policy from %s", ref_path)
		with open(ref_path, 'r', encoding='utf-8') as f:
			return json.load(f)

	@staticmethod
	def _build_slabs(raw_slabs: list) -> list:
		if not raw_slabs:
			raise ValueError("income tax policy must contain a 'slabs' array with at least one entry")

		slabs = []
		previous_max = 0
		for i, s in enumerate(raw_slabs):
			max_income = s.get("maxIncome")
			is_last = i == len(raw_slabs) - 1
			if max_income is None and not is_last:
				raise ValueError("Only the last income tax slab may be unbounded")
			if max_income is not None and max_income <= previous_max:
				raise ValueError(f"Income tax slabs must be ascending. Slab ending at {max_income} follows {previous_max}")
			slabs.append({
				"maxIncome": max_income,
				"rate": _normalize_rate(s["rate"]),
				"label": s.get("label") or IncomeTaxDetails._default_label(previous_max, max_income)
			})
			if max_income is not None:
				previous_max = max_income
		return slabs

	@staticmethod
	def _default_label(floor: float, ceiling: Optional[float]) -> str:
		if ceiling is None:
			return f"Above {floor:,.0f}"
		return f"{floor:,.0f} - {ceiling:,.0f}"

	def taxable_income(self, annual_income: float) -> float:
		return max(0, annual_income - self.standard_deduction)

	def slab_breakdown(self, taxable_income: float) -> list:
		"""
		Splits taxable income across the slabs, lowest slab first.

		Each slab only taxes the part of the income between the previous slab's
		upper bound and its own. Income exactly at an upper bound stays in the
		lower slab. Slabs holding no income are left out.
		"""
		breakdown = []
		remaining = taxable_income
		floor = 0
		for s in self.slabs:
			if remaining <= 0:
				break
			ceiling = s["maxIncome"]
			if ceiling is None:
				income_in_slab = remaining
			else:
				income_in_slab = min(remaining, ceiling - floor)
			breakdown.append(TaxSlab(
				range_label=s["label"],
				rate_percent=s["rate"] * 100,
				income_in_slab=income_in_slab,
				tax_in_slab=income_in_slab * s["rate"]
			))
			remaining -= income_in_slab
			floor = ceiling
		return breakdown

	def rebate(self, taxable_income: float, total_tax: float) -> float:
		"""
		Tax credit for taxable income at or below the rebate threshold.

		The rebate wipes out the tax up to the cap. Above the threshold there is
		no rebate at all and no marginal relief.
		"""
		if taxable_income <= self.rebate_threshold:
			return min(total_tax, self.rebate_cap)
		return 0

	def income_tax(self, annual_income: float) -> TaxBreakdown:
		"""
		Returns a TaxBreakdown for the given gross annual income.
		"""
		taxable = self.taxable_income(annual_income)
		slabs = self.slab_breakdown(taxable)
		base_tax = sum(s.tax_in_slab for s in slabs)

		cess = base_tax * self.cess_rate
		total_tax = base_tax + cess
		rebate = self.rebate(taxable, total_tax)
		final_tax = total_tax - rebate

		take_home_annual = annual_income - final_tax
		effective_rate = None if annual_income == 0 else final_tax / annual_income * 100

		return TaxBreakdown(
			annual_income=annual_income,
			taxable_income=taxable,
			base_tax=base_tax,
			cess=cess,
			total_tax=total_tax,
			rebate=rebate,
			final_tax=final_tax,
			monthly_tax=final_tax / 12,
			take_home_annual=take_home_annual,
			take_home_monthly=take_home_annual / 12,
			effective_tax_rate=effective_rate,
			slabs=slabs
		)


@lru_cache(maxsize=1)
def default_tax_details() -> IncomeTaxDetails:
	"""The policy in reference/income-tax.json, loaded once."""
	return IncomeTaxDetails()


def income_tax(annual_income: float) -> TaxBreakdown:
	return default_tax_details().income_tax(annual_income)

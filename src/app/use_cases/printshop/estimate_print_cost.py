"""
Estimate Print Cost Use Case

Prices a print job without touching any wallet.
"""
from libs.result import Result, Return, Error
from src.app.services.pricing_table import PricingTable
from src.domain.exceptions import RuleNotFound
from .dtos import EstimateCommandDTO, EstimateResponseDTO
from .error_codes import ErrorCode
from .validation import validate_print_job


class EstimatePrintCost:
    """
    Use case: Preflight cost estimation

    Applies the same validation and pricing as settlement. Read-only.
    """

    def __init__(self, pricing_table: PricingTable):
        self.pricing_table = pricing_table

    async def execute(self, command: EstimateCommandDTO) -> Result[EstimateResponseDTO]:
        error = validate_print_job(
            command.paper_size, command.print_type, command.num_pages, command.num_copies
        )
        if error:
            return Return.err(error)

        try:
            cost_per_page = self.pricing_table.cost(command.paper_size, command.print_type)
        except RuleNotFound as e:
            return Return.err(Error(code=ErrorCode.RULE_NOT_FOUND, message=str(e)))

        return Return.ok(
            EstimateResponseDTO(
                paper_size=command.paper_size,
                print_type=command.print_type,
                num_pages=command.num_pages,
                num_copies=command.num_copies,
                cost_per_page=cost_per_page,
                total_cost=self.pricing_table.total_cost(
                    command.paper_size, command.print_type, command.num_pages, command.num_copies
                ),
            )
        )

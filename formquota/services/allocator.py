"""
Allocator - admit or reject one submission against an option's response limit.

Each call is one transaction holding the option's lock across
read-limit -> count -> insert. Two calls for the same option can therefore
never both observe `count < limit` and jointly overshoot; calls for
different options do not contend.

Outcomes:
- Admitted: submission committed
- Rejected(Exhausted): option already at its limit
- Rejected(Invalid): option missing, or not under the given question/form
- Unavailable: lock timeout or storage fault, nothing written

The allocator never retries. A retry after an ambiguous failure could
admit the same logical submission twice, so that decision belongs to the
caller.
"""
import logging

from formquota.models.domain.admission import AdmissionOutcome
from formquota.models.domain.form import Submission
from formquota.services.errors import CapacityExceeded, ResourceUnavailable, ValidationError
from formquota.services.ledger import CapacityLedger

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 5.0


class Allocator:
    """Capacity-constrained submission admission"""

    def __init__(self, submission_repo, lock_timeout: float = DEFAULT_LOCK_TIMEOUT):
        """
        Args:
            submission_repo: Repository providing lock_option()
            lock_timeout: Seconds to wait for an option lock before giving up
        """
        self.submission_repo = submission_repo
        self.ledger = CapacityLedger(submission_repo)
        self.lock_timeout = lock_timeout

    async def submit(self, form_id: str, question_id: str, option_id: str) -> AdmissionOutcome:
        """
        Try to record one selection of option_id.

        Args:
            form_id: Form ID (fm_xxxxxxxx)
            question_id: Question ID (qs_xxxxxxxx) the option must belong to
            option_id: Option ID (op_xxxxxxxx)

        Returns:
            AdmissionOutcome; faults are reported as Unavailable, never raised
        """
        try:
            async with self.submission_repo.lock_option(option_id, self.lock_timeout) as held:
                option = held.option
                if option is None:
                    raise ValidationError(f"Option {option_id} not found")

                if option.question_id != question_id or option.form_id != form_id:
                    raise ValidationError(
                        f"Option {option_id} does not belong to question {question_id} of form {form_id}"
                    )

                if not option.limit.is_unlimited:
                    consumed = await self.ledger.consumed_under_lock(held)
                    if not option.limit.admits(consumed):
                        raise CapacityExceeded(
                            f"Option {option_id} is no longer available ({consumed}/{option.limit.ceiling} used)"
                        )

                submission = await held.append(Submission(
                    id="",
                    form_id=form_id,
                    question_id=question_id,
                    option_id=option_id,
                ))
        except ValidationError as e:
            logger.info(f"Rejected submission: {e}")
            return AdmissionOutcome.invalid(str(e))
        except CapacityExceeded as e:
            logger.info(f"🚫 Rejected submission: {e}")
            return AdmissionOutcome.exhausted(str(e))
        except ResourceUnavailable as e:
            logger.error(f"Submission to option {option_id} unavailable: {e}")
            return AdmissionOutcome.unavailable(str(e))
        except Exception as e:
            logger.exception(f"Unexpected failure admitting to option {option_id}: {e}")
            return AdmissionOutcome.unavailable("Internal error")

        # Reached only after the transaction committed
        logger.info(f"✅ Admitted submission {submission.id} to option {option_id}")
        return AdmissionOutcome.admitted(submission)

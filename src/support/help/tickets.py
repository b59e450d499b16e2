"""Help request submission and admin replies — commands and handlers."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from support.domain import logger, support
from support.help.help_request import HelpRequest


@support.command(part_of="HelpRequest")
class SubmitHelpRequest:
    requester_id = String(required=True, max_length=128)
    requester_name = String(max_length=255)
    requester_email = String(max_length=254)
    subject = String(required=True, max_length=255)
    message = Text(required=True)


@support.command(part_of="HelpRequest")
class RespondToHelpRequest:
    help_request_id = Identifier(required=True)
    status = String(max_length=20)
    admin_response = Text()


@support.command_handler(part_of=HelpRequest)
class HelpRequestHandler:
    @handle(SubmitHelpRequest)
    def submit(self, command):
        help_request = HelpRequest.submit(
            requester_id=command.requester_id,
            requester_name=command.requester_name,
            requester_email=command.requester_email,
            subject=command.subject,
            message=command.message,
        )
        current_domain.repository_for(HelpRequest).add(help_request)
        logger.info(
            "help_request_submitted",
            help_request_id=str(help_request.id),
            requester_id=help_request.requester_id,
        )
        return help_request

    @handle(RespondToHelpRequest)
    def respond(self, command):
        repo = current_domain.repository_for(HelpRequest)
        help_request = repo.find(command.help_request_id)
        if help_request is None:
            raise ObjectNotFoundError("Help request not found")

        help_request.respond(status=command.status, admin_response=command.admin_response)
        repo.add(help_request)
        logger.info("help_request_updated", help_request_id=str(help_request.id), status=help_request.status)
        return help_request

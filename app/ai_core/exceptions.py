"""
Routing Exceptions

A classification that matches no label is a normal outcome (None) and never
appears here.
"""


class RoutingError(Exception):
    """Base class for failures while answering a query."""

    pass


class CompletionTransportError(RoutingError):
    """
    The completion service was unreachable, timed out or returned an error.
    """

    pass


class ClassificationTransportError(CompletionTransportError):
    """
    Transport failure during category or context classification.
    The conversation window is left unmodified.
    """

    pass


class AnswerTransportError(CompletionTransportError):
    """
    Transport failure during the final answer call.
    The conversation window is left unmodified.
    """

    pass


class MalformedServiceResponse(RoutingError):
    """
    The completion service reported success but the payload carries no
    generated text. Hard error, not a "no match" classification.
    """

    pass

"""Adapter package for request assembly and HTTP I/O.

Purpose:
    Collect the concrete pieces of a Web API call (URI building, auth
    decoration, assembly, transport, dispatch) and the offline transport
    double used by tests.

Dependencies:
    ``http_client`` depends on ``requests``; the other modules are pure.

Call context:
    Wired together by ``slackapi.adapters.client.SlackClientBase``.
"""

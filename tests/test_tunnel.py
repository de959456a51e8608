from __future__ import annotations

from zeroclaw.tunnel import (
    NgrokTunnelConfig,
    TailscaleTunnelConfig,
    TunnelChoice,
    TunnelConfig,
    build_tunnel_config,
)


def test_ngrok_tunnel() -> None:
    tunnel = build_tunnel_config(TunnelChoice.NGROK, "tok_1", "", False)
    assert tunnel.provider == "ngrok"
    assert tunnel.ngrok == NgrokTunnelConfig(auth_token="tok_1", domain=None)
    assert tunnel.cloudflare is None


def test_tailscale_uses_toggle() -> None:
    tunnel = build_tunnel_config(TunnelChoice.TAILSCALE, "ignored", "box.tailnet.ts.net", True)
    assert tunnel.tailscale == TailscaleTunnelConfig(funnel=True, hostname="box.tailnet.ts.net")


def test_custom_tunnel() -> None:
    tunnel = build_tunnel_config(TunnelChoice.CUSTOM, "bore local 8080", "http://localhost:8080/health", False)
    assert tunnel.custom.start_command == "bore local 8080"
    assert tunnel.custom.health_url == "http://localhost:8080/health"


def test_none_tunnel_document() -> None:
    tunnel = build_tunnel_config(TunnelChoice.NONE, "x", "y", True)
    assert tunnel == TunnelConfig()
    assert tunnel.to_dict() == {"provider": "none", "cloudflare": None, "tailscale": None, "ngrok": None, "custom": None}


def test_tunnel_document_reads_back() -> None:
    tunnel = build_tunnel_config(TunnelChoice.CLOUDFLARE, "cf-token", "", False)
    payload = tunnel.to_dict()
    assert payload["cloudflare"] == {"token": "cf-token"}
    assert TunnelConfig.from_dict(payload) == tunnel

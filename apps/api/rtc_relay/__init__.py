"""WebRTC signaling relay: room presence and peer-to-peer SDP/ICE forwarding."""

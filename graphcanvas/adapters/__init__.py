"""
Adapters Package

Inbound adapters turn graph files into domain models; outbound adapters
export and render layout snapshots.
"""

"""Locate and fetch the answer file for an unattended install.

The answer URL and an optional pinned certificate fingerprint are
discovered from, in order of precedence:
- a ``cert_fingerprint.txt`` on the ``proxmoxinst`` labelled partition
  (fingerprint only)
- DHCP lease options ``proxmoxinst-url`` / ``proxmoxinst-fp``
- DNS TXT records ``proxmoxinst.<search>`` / ``proxmoxinst-fp.<search>``
"""

__all__ = []

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FetchPaths:
    # configuration partition
    answer_mountpoint: str = "/mnt/answer"
    partition_label: str = "proxmoxinst"
    label_search_dir: str = "/dev/disk/by-label"
    mounts_table: str = "/proc/mounts"
    cert_fingerprint_file: str = "cert_fingerprint.txt"
    fingerprint_out: str = "/tmp/cert_fingerprint"

    # DHCP options 250/251, requested via dhclient.conf
    dhcp_lease_file: str = "/var/lib/dhcp/dhclient.leases"
    dhcp_url_option: str = "proxmoxinst-url"
    dhcp_fp_option: str = "proxmoxinst-fp"

    # DNS TXT records
    resolv_conf: str = "/etc/resolv.conf"
    answer_subdomain: str = "proxmoxinst"
    answer_subdomain_fp: str = "proxmoxinst-fp"

    ip_binary: str = "/usr/sbin/ip"
    dmi_dir: str = "/sys/class/dmi/id"
    http_timeout: float = 60.0


PATHS = FetchPaths()

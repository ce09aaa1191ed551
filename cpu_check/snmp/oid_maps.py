"""
OID Constants.

所有 SNMP OID 常數集中管理於此，collector 只需引用。
Table columns are listed without an index; collectors append ``.<index>``.
"""
from __future__ import annotations

# =============================================================================
# Standard MIBs (跨廠商通用)
# =============================================================================

# SNMPv2-MIB
SYS_OBJECT_ID = "1.3.6.1.2.1.1.2.0"

# HOST-RESOURCES-MIB::hrProcessorLoad (indexed by hrDeviceIndex)
HR_PROCESSOR_LOAD = "1.3.6.1.2.1.25.3.3.1.2"

# ENTITY-MIB::entPhysicalName (indexed by entPhysicalIndex)
ENT_PHYSICAL_NAME = "1.3.6.1.2.1.47.1.1.1.1.7"

# =============================================================================
# UCD-SNMP-MIB (net-snmp, Enterprise 2021)
# =============================================================================

# systemStats scalars, percent
SS_CPU_USER = "1.3.6.1.4.1.2021.11.9.0"
SS_CPU_SYSTEM = "1.3.6.1.4.1.2021.11.10.0"
SS_CPU_IDLE = "1.3.6.1.4.1.2021.11.11.0"

# laTable::laLoadInt, load average × 100 (.1 = 1 min, .2 = 5 min, .3 = 15 min)
LA_LOAD_INT = "1.3.6.1.4.1.2021.10.1.5"

# =============================================================================
# Vendor-Specific: Juniper (Enterprise 2636)
# =============================================================================

# JUNIPER-MIB::jnxOperatingTable
JNX_OPERATING_DESCR = "1.3.6.1.4.1.2636.3.1.13.1.5"
JNX_OPERATING_CPU = "1.3.6.1.4.1.2636.3.1.13.1.8"            # percent
JNX_OPERATING_1MIN_LOAD_AVG = "1.3.6.1.4.1.2636.3.1.13.1.20"
JNX_OPERATING_5MIN_LOAD_AVG = "1.3.6.1.4.1.2636.3.1.13.1.21"

# =============================================================================
# Vendor-Specific: Cisco (Enterprise 9)
# =============================================================================

# CISCO-PROCESS-MIB::cpmCPUTotalTable
CPM_CPU_TOTAL_PHYSICAL_INDEX = "1.3.6.1.4.1.9.9.109.1.1.1.1.2"  # 0 = not mapped
CPM_CPU_TOTAL_1MIN_REV = "1.3.6.1.4.1.9.9.109.1.1.1.1.7"
CPM_CPU_TOTAL_5MIN_REV = "1.3.6.1.4.1.9.9.109.1.1.1.1.8"

# =============================================================================
# Vendor-Specific: Siemens RUGGEDCOM (Enterprise 15004)
# =============================================================================

# RUGGEDCOM-SYS-INFO-MIB::rcDeviceStsCpuUsagePercent
RC_DEVICE_STS_CPU_USAGE_PERCENT = "1.3.6.1.4.1.15004.4.2.2.6.0"

# =============================================================================
# Vendor-Specific: Moxa (Enterprise 8691)
# =============================================================================

# cpuLoading5s / 30s / 300s, relative to the model's sysObjectID
MOXA_CPU_LOADING_5S = ".1.53.0"
MOXA_CPU_LOADING_30S = ".1.54.0"
MOXA_CPU_LOADING_300S = ".1.55.0"

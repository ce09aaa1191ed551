"""
SNMP Collection Module.

架構：
    AsyncSnmpEngine  — pysnmp async wrapper (get/walk)
    MockSnmpEngine   — YAML snapshot with the same interface
    BaseCpuCollector — 每個 check type 的 SNMP 收集器基底
    registry         — check type → collector dispatch, run_check()
"""

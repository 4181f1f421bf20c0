"""ZCL cluster names and ids, plus the reserved endpoint ids."""

# Home-automation endpoint and Green Power endpoint
HA_ENDPOINT = 0x01
GP_ENDPOINT = 0xF2

# Manufacturer-specific cluster ids start here
MANUFACTURER_SPECIFIC_START = 0xFC00

CLUSTERS: dict[str, int] = {
    "genBasic": 0x0000,
    "genPowerCfg": 0x0001,
    "genDeviceTempCfg": 0x0002,
    "genIdentify": 0x0003,
    "genGroups": 0x0004,
    "genScenes": 0x0005,
    "genOnOff": 0x0006,
    "genOnOffSwitchCfg": 0x0007,
    "genLevelCtrl": 0x0008,
    "genAlarms": 0x0009,
    "genTime": 0x000A,
    "genRssiLocation": 0x000B,
    "genAnalogInput": 0x000C,
    "genAnalogOutput": 0x000D,
    "genAnalogValue": 0x000E,
    "genBinaryInput": 0x000F,
    "genBinaryOutput": 0x0010,
    "genBinaryValue": 0x0011,
    "genMultistateInput": 0x0012,
    "genMultistateOutput": 0x0013,
    "genMultistateValue": 0x0014,
    "genCommissioning": 0x0015,
    "genOta": 0x0019,
    "genPollCtrl": 0x0020,
    "greenPower": 0x0021,
    "mobileDeviceCfg": 0x0022,
    "neighborCleaning": 0x0023,
    "nearestGateway": 0x0024,
    "closuresShadeCfg": 0x0100,
    "closuresDoorLock": 0x0101,
    "closuresWindowCovering": 0x0102,
    "barrierControl": 0x0103,
    "hvacPumpCfgCtrl": 0x0200,
    "hvacThermostat": 0x0201,
    "hvacFanCtrl": 0x0202,
    "hvacDehumidificationCtrl": 0x0203,
    "hvacUserInterfaceCfg": 0x0204,
    "lightingColorCtrl": 0x0300,
    "lightingBallastCfg": 0x0301,
    "msIlluminanceMeasurement": 0x0400,
    "msIlluminanceLevelSensing": 0x0401,
    "msTemperatureMeasurement": 0x0402,
    "msPressureMeasurement": 0x0403,
    "msFlowMeasurement": 0x0404,
    "msRelativeHumidity": 0x0405,
    "msOccupancySensing": 0x0406,
    "msSoilMoisture": 0x0408,
    "pHMeasurement": 0x0409,
    "msCO2": 0x040D,
    "pm25Measurement": 0x042A,
    "ssIasZone": 0x0500,
    "ssIasAce": 0x0501,
    "ssIasWd": 0x0502,
    "piGenericTunnel": 0x0600,
    "piBacnetProtocolTunnel": 0x0601,
    "piAnalogInputReg": 0x0602,
    "piAnalogInputExt": 0x0603,
    "seMetering": 0x0702,
    "tunneling": 0x0704,
    "telecommunicationsInformation": 0x0900,
    "haApplianceIdentification": 0x0B00,
    "haMeterIdentification": 0x0B01,
    "haApplianceEventsAlerts": 0x0B02,
    "haApplianceStatistics": 0x0B03,
    "haElectricalMeasurement": 0x0B04,
    "haDiagnostic": 0x0B05,
    "touchlink": 0x1000,
    "manuSpecificIkeaAirPurifier": 0xFC7D,
    "manuSpecificPhilips": 0xFC00,
    "manuSpecificLumi": 0xFCC0,
    "manuSpecificSchneiderLightSwitchConfiguration": 0xFF17,
}

# Clusters eligible for random picks: no Green Power, no manufacturer-specific
PICKABLE_CLUSTERS: tuple[str, ...] = tuple(
    name for name, cid in CLUSTERS.items() if cid < MANUFACTURER_SPECIFIC_START and name != "greenPower"
)

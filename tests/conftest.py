"""Shared test fixtures."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from scaleticket.domain.extraction import FieldExtractor
from scaleticket.domain.models import ExtractionResult, StoredTicket, Ticket, Vehicle
from scaleticket.ports.catalog import VehicleCatalogPort
from scaleticket.ports.clock import Clock
from scaleticket.ports.randomness import RandomSource
from scaleticket.ports.storage import TicketStorePort

BRT = timezone(timedelta(hours=-3))

CTE_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<cteProc xmlns="http://www.portalfiscal.inf.br/cte" versao="4.00">
  <CTe>
    <infCte Id="CTe35240312345678000199570010000123451000123450" versao="4.00">
      <ide>
        <cCT>00012345</cCT>
        <nCT>987</nCT>
        <dhEmi>2024-03-15T10:30:00-03:00</dhEmi>
      </ide>
      <compl>
        <ObsCont xCampo="Motorista">
          <xTexto>JOAO DA SILVA</xTexto>
        </ObsCont>
        <ObsCont xCampo="Placas">
          <xTexto>Cavalo: ABC1D23 Carreta: XYZ9876</xTexto>
        </ObsCont>
      </compl>
      <infCTeNorm>
        <infCarga>
          <infQ>
            <cUnid>03</cUnid>
            <tpMed>UNIDADE</tpMed>
            <qCarga>20.0000</qCarga>
          </infQ>
          <infQ>
            <cUnid>01</cUnid>
            <tpMed>PESO REAL</tpMed>
            <qCarga>12345.0000</qCarga>
          </infQ>
        </infCarga>
      </infCTeNorm>
    </infCte>
  </CTe>
</cteProc>
"""

NFE_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<nfeProc xmlns="http://www.portalfiscal.inf.br/nfe" versao="4.00">
  <NFe>
    <infNFe Id="NFe35240312345678000199550010000456781000456780" versao="4.00">
      <ide>
        <nNF>45678</nNF>
        <dhEmi>2024-03-10T08:00:00-03:00</dhEmi>
      </ide>
      <transp>
        <vol>
          <qVol>10</qVol>
          <pesoL>18250.500</pesoL>
          <pesoB>18400.000</pesoB>
        </vol>
      </transp>
    </infNFe>
  </NFe>
</nfeProc>
"""


@pytest.fixture
def cte_xml() -> bytes:
    return CTE_XML.encode("utf-8")


@pytest.fixture
def nfe_xml() -> bytes:
    return NFE_XML.encode("utf-8")


@pytest.fixture
def extractor() -> FieldExtractor:
    """Extractor rendering dates in Brasília time, independent of the host."""
    return FieldExtractor(local_tz=BRT)


@pytest.fixture
def truck() -> Vehicle:
    return Vehicle(
        id="TRK-STD-01", category_label="TRUCK", tare_weight=9960, max_capacity=26000
    )


@pytest.fixture
def carreta() -> Vehicle:
    return Vehicle(
        id="CRT-HVY-01", category_label="CARRETA", tare_weight=9900, max_capacity=50000
    )


@pytest.fixture
def complete_result() -> ExtractionResult:
    return ExtractionResult(
        invoice_id="00012345",
        net_weight=10000.0,
        invoice_date="2024-01-01T10:00:00",
    )


@pytest.fixture
def mock_clock() -> MagicMock:
    """Mock clock frozen at 2024-06-30 09:00."""
    mock = MagicMock(spec=Clock)
    mock.now.return_value = datetime(2024, 6, 30, 9, 0, 0)
    return mock


@pytest.fixture
def mock_rng() -> MagicMock:
    """Mock random source: 08:20:00 and a +0.1 % factor."""
    mock = MagicMock(spec=RandomSource)
    mock.randint.return_value = 30000
    mock.uniform.return_value = 1.001
    return mock


@pytest.fixture
def mock_catalog(truck: Vehicle, carreta: Vehicle) -> MagicMock:
    mock = MagicMock(spec=VehicleCatalogPort)
    mock.list_vehicles.return_value = [truck, carreta]
    return mock


@pytest.fixture
def mock_store() -> MagicMock:
    """Mock ticket store echoing the ticket back with a fixed id."""
    mock = MagicMock(spec=TicketStorePort)

    def save(ticket: Ticket) -> StoredTicket:
        return StoredTicket(id="TKT-000001", ticket=ticket)

    mock.save.side_effect = save
    return mock

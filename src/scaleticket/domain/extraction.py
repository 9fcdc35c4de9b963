"""Field extraction from CTe / NFe fiscal XML documents.

Each field is obtained by an ordered list of strategies; the first one that
yields a value wins:

    invoiceId     candidate tags   cCT, nCT, InvoiceID, NF, CT, nNF, id, number
    netWeight     infQ with tpMed "PESO REAL" -> qCarga
                  candidate tags   PesoReal, pesoReal, PESO_REAL, NetWeight, ...
    invoiceDate   /cteProc/CTe/infCte/ide/dhEmi
                  /CTe/infCte/ide/dhEmi
                  candidate tags   dhEmi, dEmi, IssueDate, Date
    plate         ObsCont[xCampo contains PLACA] -> xTexto, Brazilian plate

Failures are reported on the ExtractionResult, never raised.
"""

import logging
import math
import re
from datetime import datetime, tzinfo
from pathlib import Path

from .document import Document, DocumentMalformedError, load_document
from .filename_date import extract_filename_date
from .models import ExtractionErrorKind, ExtractionResult
from .strategies import CandidateTagStrategy

logger = logging.getLogger(__name__)

INVOICE_ID_TAGS = CandidateTagStrategy(
    ("cCT", "nCT", "InvoiceID", "NF", "CT", "nNF", "id", "number")
)
NET_WEIGHT_TAGS = CandidateTagStrategy(
    ("PesoReal", "pesoReal", "PESO_REAL", "NetWeight", "Weight", "pesoL", "Net", "qCarga")
)
INVOICE_DATE_TAGS = CandidateTagStrategy(("dhEmi", "dEmi", "IssueDate", "Date"))
INVOICE_DATE_PATHS = (
    "/cteProc/CTe/infCte/ide/dhEmi",
    "/CTe/infCte/ide/dhEmi",
)

REAL_WEIGHT_MARKER = "PESO REAL"
PLATE_FIELD_MARKER = "PLACA"
# Legacy AAA9999 and Mercosul AAA9A99, as a whole token
PLATE_PATTERN = re.compile(r"(?<![A-Z0-9])[A-Z]{3}[0-9][0-9A-Z][0-9]{2}(?![A-Z0-9])")

DATE_OUTPUT_FORMAT = "%Y-%m-%d %H:%M"

INVALID_XML = "invalid XML"
WEIGHT_NOT_NUMERIC = "net weight not numeric"


def parse_document_datetime(value: str) -> datetime | None:
    """Parse an ISO-8601 date or date-time as found in dhEmi / dEmi."""
    value = value.strip()
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def parse_weight(raw: str) -> float | None:
    """Parse a weight string; None when not a finite number."""
    # float() also takes digit-group underscores
    if "_" in raw:
        return None
    try:
        weight = float(raw.strip())
    except ValueError:
        return None
    return weight if math.isfinite(weight) else None


def find_plate(text: str) -> str | None:
    match = PLATE_PATTERN.search(text)
    return match.group(0) if match else None


class FieldExtractor:
    """Extracts ticket fields from fiscal XML documents.

    Stateless apart from the local timezone used to render emission dates,
    so one instance can serve concurrent calls.
    """

    def __init__(self, local_tz: tzinfo | None = None) -> None:
        # None means the host's local timezone
        self.local_tz = local_tz

    def extract(self, data: bytes, filename: str = "") -> ExtractionResult:
        """Extract all fields from raw XML bytes."""
        try:
            document = load_document(data)
        except DocumentMalformedError as e:
            logger.warning(f"Rejected {filename or 'document'}: {e}")
            return ExtractionResult(
                error=INVALID_XML,
                error_kind=ExtractionErrorKind.DOCUMENT_MALFORMED,
            )

        return self.extract_document(document, filename)

    def extract_file(self, path: Path) -> ExtractionResult:
        """Read and extract a document from disk."""
        try:
            data = path.read_bytes()
        except OSError as e:
            logger.warning(f"Failed to read {path.name}: {e}")
            return ExtractionResult(
                error=INVALID_XML,
                error_kind=ExtractionErrorKind.DOCUMENT_MALFORMED,
            )
        return self.extract(data, path.name)

    def extract_document(
        self, document: Document, filename: str = ""
    ) -> ExtractionResult:
        result = ExtractionResult(
            invoice_id=self.extract_invoice_id(document),
            invoice_date=self.extract_invoice_date(document),
            extracted_plate=self.extract_plate(document),
            filename_date=extract_filename_date(filename) if filename else None,
        )
        raw_weight = self.extract_net_weight(document)

        missing = []
        if result.invoice_id is None:
            missing.append(f"invoiceId (tags tried: {INVOICE_ID_TAGS.describe()})")
        if raw_weight is None:
            missing.append(
                f"netWeight (strategies tried: infQ[tpMed='{REAL_WEIGHT_MARKER}']/qCarga, "
                f"tags: {NET_WEIGHT_TAGS.describe()})"
            )

        if raw_weight is not None:
            result.net_weight = parse_weight(raw_weight)

        if missing:
            result.error = f"missing required fields: {'; '.join(missing)}"
            result.error_kind = ExtractionErrorKind.FIELD_MISSING
        elif result.net_weight is None:
            result.error = WEIGHT_NOT_NUMERIC
            result.error_kind = ExtractionErrorKind.WEIGHT_NOT_NUMERIC
            logger.debug(f"Unparseable weight value: {raw_weight!r}")

        if result.error:
            logger.warning(f"Incomplete extraction for {filename or 'document'}: {result.error}")
        else:
            logger.info(
                f"Extracted {filename or 'document'}: invoice={result.invoice_id} "
                f"weight={result.net_weight} date={result.invoice_date} "
                f"plate={result.extracted_plate}"
            )
        return result

    def extract_invoice_id(self, document: Document) -> str | None:
        match = INVOICE_ID_TAGS.find(document)
        if match is None:
            return None
        tag, node = match
        logger.debug(f"invoiceId from <{tag}>")
        return node.text_content.strip() or None

    def extract_net_weight(self, document: Document) -> str | None:
        """Raw net weight text; parsing is left to the caller."""
        # Quantity lists also hold item counts, only PESO REAL is a weight
        for inf_q in document.iter("infQ"):
            tp_med = inf_q.first("tpMed")
            q_carga = inf_q.first("qCarga")
            if tp_med is None or q_carga is None:
                continue
            quantity = q_carga.text_content.strip()
            if tp_med.text_content.strip().upper() == REAL_WEIGHT_MARKER and quantity:
                logger.debug("netWeight from infQ PESO REAL")
                return quantity

        match = NET_WEIGHT_TAGS.find(document)
        if match is None:
            return None
        tag, node = match
        logger.debug(f"netWeight from <{tag}>")
        return node.text_content.strip() or None

    def extract_invoice_date(self, document: Document) -> str | None:
        raw = None
        for path in INVOICE_DATE_PATHS:
            node = document.at_path(path)
            if node is not None and node.text_content.strip():
                raw = node.text_content.strip()
                logger.debug(f"invoiceDate from {path}")
                break
        else:
            raw = INVOICE_DATE_TAGS.value(document)

        if raw is None:
            return None

        parsed = parse_document_datetime(raw)
        if parsed is None:
            logger.debug(f"Keeping unparseable invoice date: {raw!r}")
            return raw

        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(self.local_tz)
        return parsed.strftime(DATE_OUTPUT_FORMAT)

    def extract_plate(self, document: Document) -> str | None:
        for obs in document.iter("ObsCont"):
            field_name = (obs.get("xCampo") or "").upper()
            if PLATE_FIELD_MARKER not in field_name:
                continue
            x_texto = obs.first("xTexto")
            plate = find_plate(x_texto.text_content) if x_texto is not None else None
            if plate:
                return plate
        return None

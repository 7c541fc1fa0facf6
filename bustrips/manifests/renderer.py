from dataclasses import dataclass
from io import BytesIO
from typing import Dict, Iterable, List

import structlog
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from bustrips.exceptions import UnsupportedLanguageError
from bustrips.models import Passenger, Trip

logger = structlog.get_logger(__name__)

MARGIN = 50
TITLE_FONT_SIZE = 18
HEADER_FONT_SIZE = 12
ROW_FONT_SIZE = 10
ROW_HEIGHT = 20
RULE_END_X = 550

# x offsets of the name, cpf, seat and paid columns
COLUMN_X = (50, 250, 400, 480)

@dataclass(frozen=True)
class ManifestLabels:
    title: str
    columns: tuple
    paid_yes: str
    paid_no: str

LABELS: Dict[str, ManifestLabels] = {
    "en": ManifestLabels(
        title="Passengers for trip to {destination}",
        columns=("Name", "CPF", "Seat", "Paid"),
        paid_yes="Yes",
        paid_no="No",
    ),
    "pt": ManifestLabels(
        title="Passageiros da Viagem para {destination}",
        columns=("Nome", "CPF", "Assento", "Pago"),
        paid_yes="Sim",
        paid_no="Não",
    ),
}

def manifest_filename(trip_id: str) -> str:
    return f"passageiros_{trip_id}.pdf"

class ManifestRenderer:
    """Lays out a trip's passenger list as a one-table PDF.

    The whole document is built in memory and returned as bytes, so callers
    can send headers only once rendering has succeeded.

    Coordinates below are measured from the top of the page and flipped into
    reportlab's bottom-up space when drawing.
    """
    
    def __init__(self, compress: bool = True, pagesize=letter):
        self.compress = compress
        self.pagesize = pagesize
    
    def render(self, trip: Trip, passengers: Iterable[Passenger], language: str = "en") -> bytes:
        labels = LABELS.get(language)
        if labels is None:
            raise UnsupportedLanguageError(language)
        
        passengers = list(passengers)
        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=self.pagesize, pageCompression=1 if self.compress else 0)
        pdf.setTitle(labels.title.format(destination=trip.destination))
        
        page_width, page_height = self.pagesize
        bottom_limit = page_height - MARGIN
        
        # Title, then one blank line before the table
        self._text(pdf, TITLE_FONT_SIZE, MARGIN, page_width / 2,
                   labels.title.format(destination=trip.destination),
                   font="Helvetica", centered=True)
        table_top = MARGIN + TITLE_FONT_SIZE * 2
        self._draw_header(pdf, labels, table_top)
        
        row = 0
        for passenger in passengers:
            y = table_top + (row + 2) * ROW_HEIGHT
            if y + ROW_FONT_SIZE > bottom_limit:
                pdf.showPage()
                table_top = MARGIN
                self._draw_header(pdf, labels, table_top)
                row = 0
                y = table_top + (row + 2) * ROW_HEIGHT
            
            cells = self._row_cells(passenger, labels)
            for x, value in zip(COLUMN_X, cells):
                self._text(pdf, ROW_FONT_SIZE, y, x, value)
            row += 1
        
        pdf.showPage()
        pdf.save()
        
        content = buffer.getvalue()
        logger.info(
            "manifest_rendered",
            trip_id=trip.id,
            passengers=len(passengers),
            language=language,
            size_bytes=len(content),
        )
        return content
    
    def _draw_header(self, pdf: canvas.Canvas, labels: ManifestLabels, table_top: float):
        for x, label in zip(COLUMN_X, labels.columns):
            self._text(pdf, HEADER_FONT_SIZE, table_top, x, label, font="Helvetica-Bold")
        
        rule_y = self._flip(table_top + HEADER_FONT_SIZE + 6)
        pdf.line(COLUMN_X[0], rule_y, RULE_END_X, rule_y)
    
    @staticmethod
    def _row_cells(passenger: Passenger, labels: ManifestLabels) -> List[str]:
        return [
            passenger.name,
            passenger.cpf,
            str(passenger.seat_number),
            labels.paid_yes if passenger.has_paid else labels.paid_no,
        ]
    
    def _text(self, pdf: canvas.Canvas, size: int, top: float, x: float, value: str,
              font: str = "Helvetica", centered: bool = False):
        pdf.setFont(font, size)
        baseline = self._flip(top + size)
        if centered:
            pdf.drawCentredString(x, baseline, value)
        else:
            pdf.drawString(x, baseline, value)
    
    def _flip(self, top: float) -> float:
        return self.pagesize[1] - top

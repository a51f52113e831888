# backend/utils/pdf.py
from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from models.order import Order

FONT_REGULAR_NAME = "Helvetica"
FONT_BOLD_NAME = "Helvetica-Bold"
CURRENCY = "INR"


def _money(value) -> str:
    return f"{CURRENCY} {float(value or 0):,.2f}"


def generate_order_invoice_pdf(order: Order) -> bytes:
    """
    Renders a one-column invoice for an order:
    - header with order number, date, status and payment method
    - item table (name, quantity, unit price, line total)
    - subtotal computed from the items and the stored order total
    """
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4

    def draw_text(x, y, text, font=FONT_REGULAR_NAME, size=10, align="left"):
        c.setFont(font, size)
        text_str = str(text) if text is not None else ""
        if align == "right":
            c.drawRightString(x, y, text_str)
        elif align == "center":
            c.drawCentredString(x, y, text_str)
        else:
            c.drawString(x, y, text_str)

    # --- Header ---
    y = height - 20 * mm
    draw_text(width / 2, y, "Invoice", font=FONT_BOLD_NAME, size=18, align="center")
    y -= 12 * mm

    draw_text(20 * mm, y, f"Order ID: {order.id}")
    y -= 5 * mm
    draw_text(20 * mm, y, f"Date: {order.created_at or ''}")
    y -= 5 * mm
    draw_text(20 * mm, y, f"Status: {order.status}")
    if order.payment_method:
        y -= 5 * mm
        draw_text(20 * mm, y, f"Payment Method: {order.payment_method}")

    y -= 6 * mm
    c.setLineWidth(0.5)
    c.line(20 * mm, y, 190 * mm, y)
    y -= 10 * mm

    # --- Items ---
    draw_text(20 * mm, y, "Items:", font=FONT_BOLD_NAME, size=12)
    y -= 8 * mm

    c.setFont(FONT_BOLD_NAME, 9)
    c.drawString(22 * mm, y, "#")
    c.drawString(32 * mm, y, "Product")
    c.drawRightString(125 * mm, y, "Qty")
    c.drawRightString(155 * mm, y, "Unit price")
    c.drawRightString(188 * mm, y, "Line total")
    y -= 7 * mm

    computed = 0.0
    c.setFont(FONT_REGULAR_NAME, 9)
    for idx, it in enumerate(order.items, start=1):
        name = it.product.name if it.product else f"Product #{it.product_id}"
        line = float(it.unit_price or 0) * int(it.quantity or 0)
        computed += line

        c.drawString(22 * mm, y, str(idx))
        c.drawString(32 * mm, y, name[:50])
        c.drawRightString(125 * mm, y, str(it.quantity))
        c.drawRightString(155 * mm, y, _money(it.unit_price))
        c.drawRightString(188 * mm, y, _money(line))
        y -= 6 * mm

        if y < 40 * mm:
            c.showPage()
            y = height - 20 * mm
            c.setFont(FONT_REGULAR_NAME, 9)

    # --- Totals ---
    y -= 5 * mm
    if y < 30 * mm:
        c.showPage()
        y = height - 30 * mm

    draw_text(188 * mm, y, f"Subtotal (from items): {_money(computed)}", align="right")
    y -= 7 * mm
    draw_text(188 * mm, y, f"Total (order): {_money(order.total_amount)}", font=FONT_BOLD_NAME, size=12, align="right")

    c.showPage()
    c.save()
    return buffer.getvalue()

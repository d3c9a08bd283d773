"""
Code tables for Costa Rica electronic documents.
Each table maps the official code to its label; the key sets are the
compliance contract used for membership validation.
"""

CONDITIONS = {
    "01": "Contado",
    "02": "Crédito",
    "03": "Consignación",
    "04": "Apartado",
    "05": "Arrendamiento con Opción de Compra",
    "06": "Arrendamiento en Función Financiera",
    "99": "Otros",
}

# Condition of sale that makes the credit term mandatory
CREDIT_CONDITION = "02"

PAYMENT_TYPES = {
    "01": "Efectivo",
    "02": "Tarjeta",
    "03": "Cheque",
    "04": "Transferencia",
    "05": "Recaudado por Terceros",
    "99": "Otros",
}

DOCUMENT_TYPES = {
    "01": "Factura Electronica",
    "02": "Nota de débito",
    "03": "Nota de crédito",
    "04": "Tiquete Electrónico",
    "05": "Nota de despacho",
    "06": "Contrato",
    "07": "Procedimiento",
    "08": "Comprobante Emitido en Contingencia",
    "99": "Otros",
}

# Document types that must reference the document they amend
REFERENCING_DOCUMENT_TYPES = ("02", "03")

DOCUMENT_SITUATION = {
    "1": "Normal",
    "2": "Contingencia",
    "3": "Sin Internet",
}

IDENTIFICATION_TYPES = {
    "01": "Cédula Fisica",
    "02": "Cédula Jurídica",
    "03": "DIMEX",
    "04": "NITE",
}

EXONERATION_TYPES = {
    "01": "Compras Autorizadas",
    "02": "Ventas exentas a diplomáticos",
    "03": "Orden de Compra (Instituciones Públicas y otros organismos)",
    "04": "Exenciones Dirección General de Hacienda",
    "05": "Zonas Francas",
    "99": "Otros",
}

TAX_CODES = {
    "01": "Impuesto General sobre las Ventas",
    "02": "Impuesto Selectivo de Consumo",
    "03": "Impuesto Único a los combustibles",
    "04": "Impuesto específico de Bebidas Alcohólicas",
    "05": "Impuesto Específico sobre las bebidas envasadas sin contenido alcohólico y jabones de tocador",
    "06": "Impuesto a los Productos de Tabaco",
    "07": "Servicio",
    "08": "Impuesto General sobre las ventas de bienes usados (Factor)",
    "12": "Impuesto Específico al Cemento",
    "99": "Otros",
}

REFERENCE_CODES = {
    "01": "Anula Documento de Referencia",
    "02": "Corrige monto",
    "03": "Corrige texto documento de referencia",
    "04": "Referencia a otro documento",
    "05": "Sustituye comprobante provisional por contingencia",
    "99": "Otros",
}

COMMERCIAL_CODE_TYPES = {
    "01": "Código del producto del vendedor",
    "02": "Código del producto del comprador",
    "03": "Código del producto asignado por la industria",
    "04": "Código uso interno",
    "99": "Otros",
}

CODE_TABLES = {
    "conditions": CONDITIONS,
    "payment_types": PAYMENT_TYPES,
    "document_types": DOCUMENT_TYPES,
    "document_situation": DOCUMENT_SITUATION,
    "identification_types": IDENTIFICATION_TYPES,
    "exoneration_types": EXONERATION_TYPES,
    "tax_codes": TAX_CODES,
    "reference_codes": REFERENCE_CODES,
    "commercial_code_types": COMMERCIAL_CODE_TYPES,
}

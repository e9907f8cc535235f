# main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
# Importamos los routers de la capa de infraestructura
from app.infrastructure.api.routers import invoices_router

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - [%(funcName)s] - %(message)s')

app = FastAPI(
    title="API de Factura Electrónica AFIP",
    description="Autorización de comprobantes electrónicos contra el WSFEv1.",
    version="1.0.0-DDD"
)

if config.CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

app.include_router(invoices_router.router)


@app.get("/", tags=["Health Check"])
def read_root():
    return {"status": "ok", "message": "Servicio de factura electrónica operativo"}

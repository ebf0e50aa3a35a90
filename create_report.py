"""Script de prueba manual: reporta un equipo contra una API en ejecución.

Uso: python create_report.py [BASE_URL] [ruta/a/foto.jpg]
"""
import mimetypes
import os
import sys

import requests

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else os.getenv("BASE_URL", "http://127.0.0.1:8000")
PHOTO_PATH = sys.argv[2] if len(sys.argv) > 2 else None


def main():
    print("Verificando estado de la API...")
    response = requests.get(f"{BASE_URL}/api/health", timeout=10)
    print("Health:", response.json())

    report_data = {
        "title": "Projetor sem ligar",
        "description": "O projetor não liga mesmo com o cabo conectado.",
        "location": "Mesa 5",
        "laboratory": "Lab 1",
    }
    files = None
    if PHOTO_PATH:
        mime_type = mimetypes.guess_type(PHOTO_PATH)[0] or "application/octet-stream"
        files = {"photo": (os.path.basename(PHOTO_PATH), open(PHOTO_PATH, "rb"), mime_type)}

    print("\nEnviando un reporte...")
    try:
        response = requests.post(f"{BASE_URL}/api/equipments", data=report_data, files=files, timeout=30)
    finally:
        if files:
            files["photo"][1].close()
    print("Código de estado:", response.status_code)
    if response.status_code != 201:
        print("Error al crear reporte:", response.text)
        sys.exit(1)
    equipment = response.json()["equipment"]
    print("Reporte creado:", equipment)

    print("\nCambiando status a em_manutencao...")
    response = requests.put(
        f"{BASE_URL}/api/equipments/{equipment['_id']}",
        json={"status": "em_manutencao"},
        timeout=10,
    )
    print("Código de estado:", response.status_code, response.json())

    print("\nListando reportes...")
    response = requests.get(f"{BASE_URL}/api/equipments", timeout=10)
    print("Reportes:", len(response.json()))


if __name__ == "__main__":
    main()

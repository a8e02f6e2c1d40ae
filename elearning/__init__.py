"""
E-Learning Package - DSP (Digital Solutions Platform)

Dieses Paket enthält den Kurskatalog und die Einschreibungen der
E-Learning-Plattform. Zahlungsanbieter (z.B. PayU) schreiben Benutzer
ausschließlich über den EnrolmentService ein.

Features:
- Kurse mit Einschreibe-Instanzen (Preis, Währung, Laufzeit)
- Einschreibungen mit Zeitfenster
- Kursrollen mit Autoritätsreihenfolge

Struktur:
- courses/: Modelle und Service für Kurse und Einschreibungen
- migrations/: Datenbankmigrationen
- tests/: Test-Suite

Author: DSP Development Team
Created: 10.07.2025
Version: 1.0.0
"""

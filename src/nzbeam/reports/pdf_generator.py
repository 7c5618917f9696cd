"""
PDF calculation report generator using ReportLab.
"""

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.platypus import (
    SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle, PageBreak
)
from datetime import datetime
from typing import List, Optional, Union
from xml.sax.saxutils import escape
import io

from nzbeam.models.inputs import BeamDesignRecord, FinalReinforcement
from nzbeam.models.outputs import (
    CheckResult, CheckStatus, DesignOption, SLSCheckError, main_bar_prefix, overall_status,
    stirrup_prefix,
)

# Built-in Helvetica has no glyphs for these
_PDF_REPLACEMENTS = {
    "≤": "<=", "≥": ">=", "φ": "phi ", "ɸ": "phi ", "ρ": "rho", "∞": "inf",
    "⁶": "^6", "⁴": "^4", "²": "2",
}

_STATUS_COLORS = {
    CheckStatus.PASS: '#27ae60',
    CheckStatus.FAIL: '#e74c3c',
    CheckStatus.INFO: '#7f8c8d',
}


def _pdf_text(text: str) -> str:
    for symbol, plain in _PDF_REPLACEMENTS.items():
        text = text.replace(symbol, plain)
    return text


class PDFReportGenerator:
    """
    Generate PDF design reports using ReportLab.
    """

    def __init__(self, max_options: int = 10):
        self.max_options = max_options
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        """Set up custom paragraph styles."""
        self.styles.add(ParagraphStyle(
            name='TitleStyle',
            parent=self.styles['Title'],
            fontSize=18,
            spaceAfter=30,
            textColor=colors.HexColor('#2c3e50')
        ))

        self.styles.add(ParagraphStyle(
            name='SectionHeader',
            parent=self.styles['Heading2'],
            fontSize=14,
            spaceBefore=20,
            spaceAfter=10,
            textColor=colors.HexColor('#34495e'),
            borderWidth=1,
            borderColor=colors.HexColor('#3498db'),
            borderPadding=5
        ))

        self.styles.add(ParagraphStyle(
            name='SubSection',
            parent=self.styles['Heading3'],
            fontSize=11,
            spaceBefore=10,
            spaceAfter=5,
            textColor=colors.HexColor('#7f8c8d')
        ))

    def generate_report(
        self,
        record: BeamDesignRecord,
        options: List[DesignOption],
        check_results: List[CheckResult],
        sls_results: Union[List[CheckResult], SLSCheckError, None],
        reinforcement: Optional[FinalReinforcement] = None,
    ) -> bytes:
        """
        Generate complete PDF report.

        Args:
            record: Design inputs and project details
            options: Ranked options from the generator
            check_results: Detailed check lines for the chosen layout
            sls_results: SLS check lines, or the SLS error record
            reinforcement: Layout that was checked (defaults to the record's)

        Returns:
            PDF file content as bytes
        """
        reinforcement = reinforcement or record.final_reinforcement

        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=2*cm,
            leftMargin=2*cm,
            topMargin=2*cm,
            bottomMargin=2*cm,
            title=f"Beam design {record.project_info.beam_mark}",
        )

        story = []
        story.extend(self._build_title_page(record, reinforcement, check_results, sls_results))
        story.extend(self._build_input_summary(record))
        story.extend(self._build_options_section(record, options))
        story.extend(self._build_check_section(
            "3. DETAILED DESIGN CHECKS", check_results, "No final reinforcement selected."
        ))
        if isinstance(sls_results, SLSCheckError):
            story.append(Paragraph("4. SERVICEABILITY CHECKS", self.styles['SectionHeader']))
            story.append(Paragraph(
                f'<font color="#e74c3c"><b>SLS check failed:</b></font> {escape(sls_results.error)}',
                self.styles['BodyText']
            ))
        else:
            story.extend(self._build_check_section(
                "4. SERVICEABILITY CHECKS", sls_results or [], "SLS checks not run."
            ))

        doc.build(story)

        buffer.seek(0)
        return buffer.getvalue()

    def _build_title_page(self, record, reinforcement, check_results, sls_results):
        """Build title page elements."""
        elements = []
        info = record.project_info
        materials = record.material_properties

        elements.append(Paragraph("BEAM DESIGN REPORT", self.styles['TitleStyle']))
        elements.append(Paragraph(f"<b>{escape(info.project_name)}</b>", self.styles['Heading2']))
        elements.append(Spacer(1, 20))

        all_results = list(check_results)
        if isinstance(sls_results, list):
            all_results.extend(sls_results)
        if isinstance(sls_results, SLSCheckError) or not all_results:
            status = 'INCOMPLETE'
        else:
            status = overall_status(all_results).value.upper()
        status_color = '#27ae60' if status == 'PASS' else '#e74c3c' if status == 'FAIL' else '#f39c12'
        elements.append(Paragraph(
            f'<font color="{status_color}"><b>DESIGN STATUS: {status}</b></font>',
            self.styles['Heading3']
        ))
        elements.append(Spacer(1, 30))

        geometry = record.beam_geometry
        summary_data = [
            ['Beam Mark', info.beam_mark],
            ['Section', f'{geometry.breadth:.0f} x {geometry.depth:.0f} mm'],
        ]
        if reinforcement is not None:
            summary_data.append([
                'Main Steel',
                f'{reinforcement.n} x {main_bar_prefix(materials.main_bar_grade_name)}{reinforcement.db:g}'
            ])
            summary_data.append([
                'Stirrups',
                f'{stirrup_prefix(materials.stirrup_grade_name)}{reinforcement.ds:g} @ '
                f'{reinforcement.ss:g}mm ({reinforcement.legs} legs)'
            ])
        summary_data.append(['Design Code', record.code_standard])

        summary_table = Table(summary_data, colWidths=[5*cm, 8*cm])
        summary_table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (0, -1), colors.HexColor('#ecf0f1')),
            ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 10),
            ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.gray),
            ('TOPPADDING', (0, 0), (-1, -1), 8),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 8),
        ]))
        elements.append(summary_table)
        elements.append(Spacer(1, 30))

        meta_data = [
            ['Project No.', info.project_no],
            ['Client', info.client],
            ['Designer', info.designer or 'Not specified'],
            ['Report Date', datetime.now().strftime('%Y-%m-%d %H:%M')],
        ]
        meta_table = Table(meta_data, colWidths=[3*cm, 8*cm])
        meta_table.setStyle(TableStyle([
            ('FONTSIZE', (0, 0), (-1, -1), 9),
            ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
        ]))
        elements.append(meta_table)
        if info.note:
            elements.append(Spacer(1, 10))
            elements.append(Paragraph(escape(info.note), self.styles['BodyText']))

        elements.append(PageBreak())
        return elements

    def _build_input_summary(self, record):
        """Build input summary section."""
        elements = []
        forces = record.design_forces
        geometry = record.beam_geometry
        materials = record.material_properties
        sls = record.sls_design_inputs

        elements.append(Paragraph("1. INPUT DATA", self.styles['SectionHeader']))

        elements.append(Paragraph("1.1 Design Actions", self.styles['SubSection']))
        elements.append(self._create_data_table([
            ['Parameter', 'Value', 'Unit'],
            ['Design moment M*', f'{forces.moment:.1f}', 'kNm'],
            ['Design shear V*', f'{forces.shear:.1f}', 'kN'],
            ['phi bending', f'{forces.phi_b:.2f}', '-'],
            ['phi shear', f'{forces.phi_s:.2f}', '-'],
            ['Service moment M*s', f'{sls.service_moment:.1f}', 'kNm'],
        ]))
        elements.append(Spacer(1, 10))

        elements.append(Paragraph("1.2 Geometry", self.styles['SubSection']))
        elements.append(self._create_data_table([
            ['Parameter', 'Value', 'Unit'],
            ['Breadth B', f'{geometry.breadth:.0f}', 'mm'],
            ['Depth D', f'{geometry.depth:.0f}', 'mm'],
            ['Cover', f'{geometry.cover:.0f}', 'mm'],
            ['Span', f'{geometry.span:.2f}', 'm'],
        ]))
        elements.append(Spacer(1, 10))

        elements.append(Paragraph("1.3 Materials", self.styles['SubSection']))
        section_label = "f'm" if materials.is_masonry else "f'c"
        elements.append(self._create_data_table([
            ['Parameter', 'Value', 'Unit'],
            ['Section material', f'{materials.section_material_type} {materials.concrete_grade_name}', '-'],
            [section_label, f'{materials.concrete_fc:.0f}', 'MPa'],
            ['Ec', f'{materials.concrete_ec:.0f}', 'MPa'],
            [f'Main bars fy ({materials.main_bar_grade_name})', f'{materials.main_bar_fy:.0f}', 'MPa'],
            [f'Stirrups fys ({materials.stirrup_grade_name})', f'{materials.stirrup_fys:.0f}', 'MPa'],
        ]))

        return elements

    def _build_options_section(self, record, options):
        """Build ranked options table."""
        elements = []
        materials = record.material_properties

        elements.append(Paragraph("2. REINFORCEMENT OPTIONS", self.styles['SectionHeader']))
        if not options:
            elements.append(Paragraph(
                "No feasible design was found in the search grid. "
                "Increase the section size or material strengths.",
                self.styles['BodyText']
            ))
            return elements

        data = [['#', 'Main Bars', 'Stirrups', 'M util', 'V util', 'Warnings']]
        for i, opt in enumerate(options[:self.max_options], 1):
            data.append([
                str(i),
                opt.bar_label(materials.main_bar_grade_name),
                opt.stirrup_label(materials.stirrup_grade_name),
                f'{opt.m_util:.2f}',
                f'{opt.v_util:.2f}',
                ', '.join(opt.warnings) or '-',
            ])
        table = Table(data, colWidths=[1*cm, 3*cm, 4.5*cm, 1.7*cm, 1.7*cm, 4*cm])
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#3498db')),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 8),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.gray),
            ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#f8f9fa')]),
        ]))
        elements.append(table)
        if len(options) > self.max_options:
            elements.append(Paragraph(
                f"Showing {self.max_options} of {len(options)} options.", self.styles['BodyText']
            ))
        return elements

    def _build_check_section(self, title, results, empty_text):
        """Build a check table section."""
        elements = [Paragraph(title, self.styles['SectionHeader'])]
        if not results:
            elements.append(Paragraph(empty_text, self.styles['BodyText']))
            return elements

        data = [['Check', 'Value', 'Limit', 'Status']]
        for r in results:
            data.append([_pdf_text(r.check_name), _pdf_text(r.value), _pdf_text(r.limit), r.status.value.upper()])
        elements.append(self._create_check_table(data, results))

        notes = [r for r in results if r.notes]
        if notes:
            elements.append(Spacer(1, 6))
            for r in notes:
                elements.append(Paragraph(
                    f"<b>{escape(_pdf_text(r.check_name))}:</b> {escape(_pdf_text(r.notes))}",
                    self.styles['BodyText']
                ))
        return elements

    def _create_data_table(self, data):
        """Create a formatted data table."""
        table = Table(data, colWidths=[6*cm, 4*cm, 2*cm])
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#3498db')),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 9),
            ('ALIGN', (1, 0), (-1, -1), 'CENTER'),
            ('ALIGN', (0, 0), (0, -1), 'LEFT'),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.gray),
            ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#f8f9fa')]),
            ('TOPPADDING', (0, 0), (-1, -1), 6),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
        ]))
        return table

    def _create_check_table(self, data, results):
        """Create a check status table with color coding."""
        table = Table(data, colWidths=[5.5*cm, 4*cm, 5*cm, 2*cm])
        style = [
            ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#34495e')),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 8),
            ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
            ('ALIGN', (-1, 0), (-1, -1), 'CENTER'),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.gray),
            ('TOPPADDING', (0, 0), (-1, -1), 5),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 5),
        ]

        for i, result in enumerate(results, 1):
            style.append(('TEXTCOLOR', (-1, i), (-1, i), colors.HexColor(_STATUS_COLORS[result.status])))
            style.append(('FONTNAME', (-1, i), (-1, i), 'Helvetica-Bold'))

        table.setStyle(TableStyle(style))
        return table
